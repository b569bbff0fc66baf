"""
Process Runner
==============

Runs the CUPS command line tools and captures their output.

Every operation reports failure through ``ExecutionError``: a non-zero exit
status and a failure to start the process look the same to callers.
"""

import logging
import subprocess
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Dict, Optional, Sequence, Tuple, Union

from .config import RUNNER_WORKERS
from .errors import ExecutionError

logger = logging.getLogger(__name__)

Payload = Union[str, bytes]


class BaseRunner(ABC):
    """Abstract process runner.

    Subclasses only implement ``_execute``; the synchronous, asynchronous and
    piped variants are built on top of it.
    """

    def __init__(self, max_workers: int = RUNNER_WORKERS):
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix='cups-runner'
        )

    @abstractmethod
    def _execute(self, command: str, args: Sequence[str],
                 payload: Optional[bytes] = None) -> Tuple[int, str, str]:
        """
        Run a command to completion.

        Args:
            command: Program name or path
            args: Program arguments
            payload: Bytes written to the program's stdin, or None

        Returns:
            Tuple of (returncode, stdout, stderr)

        Raises:
            OSError: If the process could not be started
        """
        pass

    def run_sync(self, command: str, args: Sequence[str] = ()) -> str:
        """Run a command and return its stdout, blocking the caller."""
        return self._run(command, list(args), None)

    def run_async(self, command: str, args: Sequence[str] = ()) -> 'Future[str]':
        """Run a command on a worker thread."""
        return self._executor.submit(self._run, command, list(args), None)

    def run_async_with_input(self, command: str, payload: Payload,
                             args: Sequence[str] = ()) -> 'Future[str]':
        """Run a command on a worker thread, streaming ``payload`` into stdin."""
        if isinstance(payload, str):
            payload = payload.encode('utf-8')
        return self._executor.submit(self._run, command, list(args), payload)

    def shutdown(self, wait: bool = True):
        """Stop the worker pool."""
        self._executor.shutdown(wait=wait)

    def _run(self, command: str, args: list, payload: Optional[bytes]) -> str:
        logger.debug("Running %s %s", command, ' '.join(args))
        try:
            returncode, stdout, stderr = self._execute(command, args, payload)
        except OSError as e:
            raise ExecutionError(command, args, str(e)) from e

        if returncode != 0:
            detail = stderr.strip() or f"Unknown error code '{returncode}'"
            raise ExecutionError(command, args, detail)
        return stdout


class SubprocessRunner(BaseRunner):
    """Runner backed by ``subprocess.run``."""

    def _execute(self, command, args, payload=None):
        result = subprocess.run(
            [command, *args],
            input=payload,
            capture_output=True,
        )
        return (
            result.returncode,
            result.stdout.decode('utf-8', errors='replace'),
            result.stderr.decode('utf-8', errors='replace'),
        )


# =============================================================================
# Future helpers
# =============================================================================

def chain(source: Future, transform: Callable,
          on_error: Optional[Callable[[BaseException], BaseException]] = None) -> Future:
    """
    Derive a future whose result is ``transform(source.result())``.

    Args:
        source: Future to follow
        transform: Applied to the successful result
        on_error: Maps a failure of ``source`` to the exception to report

    Returns:
        New future
    """
    target: Future = Future()

    def _done(done: Future):
        error = done.exception()
        if error is not None:
            target.set_exception(on_error(error) if on_error else error)
            return
        try:
            target.set_result(transform(done.result()))
        except Exception as e:
            target.set_exception(e)

    source.add_done_callback(_done)
    return target


def gather(futures: Dict[str, Future]) -> Future:
    """
    Wait for a mapping of futures.

    Resolves to ``{key: result}`` once every future succeeded, or fails with
    the first error observed.
    """
    target: Future = Future()
    results: Dict[str, object] = {}
    pending = set(futures)
    lock = threading.Lock()

    if not pending:
        target.set_result({})
        return target

    def _on_done(key: str, done: Future):
        error = done.exception()
        with lock:
            if target.done():
                return
            if error is not None:
                target.set_exception(error)
                return
            results[key] = done.result()
            pending.discard(key)
            if not pending:
                target.set_result({k: results[k] for k in futures})

    for key, future in futures.items():
        future.add_done_callback(lambda f, key=key: _on_done(key, f))
    return target


def failed(error: BaseException) -> Future:
    """Return an already-failed future."""
    future: Future = Future()
    future.set_exception(error)
    return future
