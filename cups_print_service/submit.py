"""
Job Submission
==============

Translates a ``PrintRequest`` into an ``lp`` command line, runs it and pulls
the job handle out of the confirmation text.

    $ echo '^XA...^XZ' | lp -o raw -d ZPL-PRINTER
    request id is ZPL-PRINTER-92 (0 file(s))
"""

import logging
from concurrent.futures import Future
from typing import Callable, List, Mapping, Optional

from .config import LP_COMMAND
from .errors import ExecutionError, SubmissionError, ValidationError
from .models import PrintRequest, JobHandle
from .runner import BaseRunner, chain

logger = logging.getLogger(__name__)


def validate(request: PrintRequest):
    """Raise ``ValidationError`` if the request cannot be submitted."""
    if not request.printer:
        raise ValidationError('no printer')
    if request.data is not None and not isinstance(request.data, (str, bytes)):
        raise ValidationError('data must be text or bytes')
    if request.copies is not None and request.copies < 1:
        raise ValidationError('copies must be a positive integer')
    has_data = request.data is not None and len(request.data) > 0
    if not has_data and not request.file:
        raise ValidationError('no data or file')
    if has_data and request.file:
        raise ValidationError('both data and file')


def build_arguments(request: PrintRequest) -> List[str]:
    """Build the ``lp`` argument list for a request."""
    args = list(request.args)

    if not request.file:
        args += ['-o', request.type.flag]
    if request.copies:
        args += ['-n', str(request.copies)]
    args += ['-d', request.printer]
    if request.destination_host:
        args += ['-h', request.destination_host]
    if request.username:
        args += ['-U', request.username]
    if request.title:
        args += ['-T', request.title]
    if request.quality:
        args += ['-o', f'print-quality={request.quality.flag}']
    if request.orientation:
        args += ['-o', f'orientation-requested={request.orientation.flag}']
    if request.encryption:
        args.append('-E')

    if request.file:
        args += ['--', request.file]
    return args


def option_arguments(options: Optional[Mapping[str, object]]) -> List[str]:
    """Map ``{key: value}`` onto repeated ``-o key=value`` flags."""
    args = []
    for key, value in (options or {}).items():
        args += ['-o', f'{key}={value}']
    return args


def parse_job_handle(response: str) -> JobHandle:
    """
    Extract the job handle from lp's confirmation text.

    "request id is ZPL-PRINTER-92 (0 file(s))" gives "ZPL-PRINTER-92". Text
    with three tokens or fewer is returned whole, trimmed.
    """
    tokens = response.split()
    if len(tokens) > 3:
        return tokens[-3]
    return response.strip()


def job_number(handle: JobHandle) -> Optional[int]:
    """Numeric suffix of a ``<printer>-<id>`` handle, or None."""
    _, _, suffix = handle.rpartition('-')
    if suffix.isdigit():
        return int(suffix)
    return None


def _wrap(error: BaseException) -> BaseException:
    if isinstance(error, ExecutionError):
        return SubmissionError(error)
    return error


class JobSubmitter:
    """Submits print requests with ``lp``."""

    def __init__(self, runner: BaseRunner, command: str = LP_COMMAND):
        self.runner = runner
        self.command = command

    def submit(self, request: PrintRequest) -> 'Future[JobHandle]':
        """
        Submit a print job.

        Args:
            request: Job parameters

        Returns:
            Future resolving to the job handle, or failing with SubmissionError

        Raises:
            ValidationError: Before anything is run, if the request is incomplete
        """
        validate(request)
        args = build_arguments(request)

        if request.file:
            future = self.runner.run_async(self.command, args)
        else:
            future = self.runner.run_async_with_input(self.command, request.data, args)

        def _handle(response: str) -> JobHandle:
            handle = parse_job_handle(response)
            logger.info("Submitted job %s to %s", handle, request.printer)
            return handle

        return chain(future, _handle, on_error=_wrap)

    def submit_direct(self, request: PrintRequest,
                      success: Callable[[JobHandle], object],
                      error: Callable[[BaseException], object]):
        """Callback flavour of ``submit``; every failure goes to ``error``."""
        try:
            future = self.submit(request)
        except ValidationError as e:
            error(e)
            return

        def _done(done: Future):
            failure = done.exception()
            if failure is not None:
                error(failure)
            else:
                success(done.result())

        future.add_done_callback(_done)
