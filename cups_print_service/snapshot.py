"""
Status Snapshot
===============

Collects the raw output of the ``lpstat`` status queries.
"""

import logging
from concurrent.futures import Future
from typing import Dict

from .config import LPSTAT_COMMAND
from .errors import ExecutionError, SnapshotError
from .runner import BaseRunner, chain, gather

logger = logging.getLogger(__name__)

Snapshot = Dict[str, str]

# Query name -> lpstat flags
QUERIES = {
    'printers': ['-p'],
    'accepting': ['-a'],
    'addresses': ['-s'],
    'default': ['-d'],
    'details': ['-l', '-p'],
}


def _wrap(error: BaseException) -> BaseException:
    if isinstance(error, ExecutionError):
        return SnapshotError(error)
    return error


class SnapshotBuilder:
    """Runs every status query and returns their outputs by query name."""

    def __init__(self, runner: BaseRunner, command: str = LPSTAT_COMMAND):
        self.runner = runner
        self.command = command

    def build_sync(self) -> Snapshot:
        """Run the queries one after another, blocking the caller."""
        snapshot = {}
        for name, flags in QUERIES.items():
            try:
                snapshot[name] = self.runner.run_sync(self.command, flags)
            except ExecutionError as e:
                raise SnapshotError(e) from e
        return snapshot

    def build_async(self) -> 'Future[Snapshot]':
        """Run the queries concurrently; the future resolves when all are done."""
        futures = {
            name: self.runner.run_async(self.command, flags)
            for name, flags in QUERIES.items()
        }
        return chain(gather(futures), dict, on_error=_wrap)
