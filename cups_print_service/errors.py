"""
Errors
======

Exception hierarchy for the CUPS print service.
"""

from typing import List, Optional, Sequence


class PrintServiceError(Exception):
    """Base class for all print service errors."""


class ExecutionError(PrintServiceError):
    """An external command exited non-zero or could not be started."""

    def __init__(self, command: str, args: Sequence[str], detail: str):
        self.command = command
        self.args_list: List[str] = list(args)
        self.detail = detail
        super().__init__(
            f"Failed to run command '{' '.join([command, *self.args_list])}' - {detail}"
        )


class ValidationError(PrintServiceError, ValueError):
    """Caller omitted or misused a required field."""


class NotFoundError(PrintServiceError, LookupError):
    """Referenced printer is absent from the current printer list."""

    def __init__(self, printer: str):
        self.printer = printer
        super().__init__(f'Printer "{printer}" not found')


class _WrappedExecutionError(PrintServiceError):
    prefix = ''

    def __init__(self, cause: ExecutionError, message: Optional[str] = None):
        self.cause = cause
        self.__cause__ = cause
        super().__init__(message or f'{self.prefix}: {cause}')


class SnapshotError(_WrappedExecutionError):
    """A status query failed while building a printer snapshot."""

    prefix = 'Printer status query failed'


class SubmissionError(_WrappedExecutionError):
    """The submission command failed."""

    prefix = 'Print job submission failed'
