"""
Printer Directory
=================

Caches the printer list and submits jobs to known printers.

The first ``list_printers()`` call blocks while the status queries run.
Later calls return the cached list at once and refresh it in the background,
so callers see the refreshed data on their next call.
"""

import logging
import threading
from concurrent.futures import Future
from typing import Callable, List, Mapping, Optional, Union

from .config import LP_COMMAND, LPSTAT_COMMAND
from .errors import NotFoundError, SnapshotError, ValidationError
from .models import PrinterRecord, PrintRequest, JobHandle
from .parser import extract_printers
from .runner import BaseRunner, SubprocessRunner, failed
from .snapshot import Snapshot, SnapshotBuilder
from .submit import JobSubmitter, option_arguments, validate

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL_MS = 15000


# =============================================================================
# Timers
# =============================================================================

class RepeatingTimer:
    """Calls ``callback`` every ``interval`` seconds on a daemon thread."""

    def __init__(self, interval: float, callback: Callable[[], object]):
        self.interval = interval
        self.callback = callback
        self._stopped = threading.Event()
        self._thread = threading.Thread(target=self._loop, name='cups-refresh', daemon=True)
        self._thread.start()

    def _loop(self):
        while not self._stopped.wait(self.interval):
            try:
                self.callback()
            except Exception:
                logger.exception("Printer refresh timer callback failed")

    def cancel(self):
        """Stop the timer and wait for a running callback to finish."""
        self._stopped.set()
        if threading.current_thread() is not self._thread:
            self._thread.join()


class ThreadScheduler:
    """Default scheduler for ``Directory.auto_refresh``."""

    def schedule(self, interval: float, callback: Callable[[], object]) -> RepeatingTimer:
        return RepeatingTimer(interval, callback)


# =============================================================================
# Directory
# =============================================================================

class Directory:
    """Printer list cache with optional periodic refresh."""

    def __init__(self, runner: Optional[BaseRunner] = None, scheduler=None,
                 lpstat_command: str = LPSTAT_COMMAND, lp_command: str = LP_COMMAND):
        """
        Initialize the directory. Nothing is run until the first lookup.

        Args:
            runner: Process runner (defaults to a SubprocessRunner)
            scheduler: Object with ``schedule(seconds, callback)`` returning a
                handle with ``cancel()`` (defaults to a ThreadScheduler)
            lpstat_command: Status command
            lp_command: Submission command
        """
        self.runner = runner or SubprocessRunner()
        self.scheduler = scheduler or ThreadScheduler()
        self.snapshots = SnapshotBuilder(self.runner, lpstat_command)
        self.submitter = JobSubmitter(self.runner, lp_command)

        self._lock = threading.Lock()
        self._printers: List[PrinterRecord] = []
        self._loaded = False
        self._refresh_timer = None

        # Refresh ordering: a result older than the applied one is dropped
        self._generation = 0
        self._applied_generation = 0

    @property
    def loaded(self) -> bool:
        with self._lock:
            return self._loaded

    @property
    def auto_refresh_active(self) -> bool:
        with self._lock:
            return self._refresh_timer is not None

    # =========================================================================
    # Loading
    # =========================================================================

    def _next_generation(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def _apply(self, generation: int, snapshot: Snapshot) -> List[PrinterRecord]:
        printers = extract_printers(snapshot)
        with self._lock:
            if generation < self._applied_generation:
                logger.debug("Discarding stale printer refresh #%d", generation)
                return list(self._printers)
            self._printers = printers
            self._loaded = True
            self._applied_generation = generation
        logger.debug("Loaded %d printer(s)", len(printers))
        return list(printers)

    def _load(self) -> List[PrinterRecord]:
        generation = self._next_generation()
        return self._apply(generation, self.snapshots.build_sync())

    def _refresh_in_background(self):
        generation = self._next_generation()

        def _done(done: Future):
            error = done.exception()
            if error is not None:
                logger.warning("Background printer refresh failed: %s", error)
                return
            self._apply(generation, done.result())

        self.snapshots.build_async().add_done_callback(_done)

    def list_printers(self) -> List[PrinterRecord]:
        """
        Get the printer list.

        Blocks on the first call. Afterwards returns the cached list and
        starts a background refresh.

        Raises:
            SnapshotError: If the first load fails
        """
        with self._lock:
            loaded = self._loaded
            cached = list(self._printers)

        if not loaded:
            return self._load()

        self._refresh_in_background()
        return cached

    def get_printer(self, name: str) -> Optional[PrinterRecord]:
        """
        Look up a printer by name.

        Without auto-refresh the list is re-read first, so lookups stay as
        fresh as possible.

        Returns:
            The record, or None if the printer is unknown
        """
        with self._lock:
            stale = not self._loaded or self._refresh_timer is None
        if stale:
            self.list_printers()

        with self._lock:
            for printer in self._printers:
                if printer.name == name:
                    return printer
        return None

    # =========================================================================
    # Auto-refresh
    # =========================================================================

    def _tick(self):
        try:
            self.list_printers()
        except SnapshotError as e:
            logger.warning("Scheduled printer refresh failed: %s", e)

    def auto_refresh(self, interval_ms: Optional[int] = DEFAULT_REFRESH_INTERVAL_MS):
        """
        Refresh the printer list every ``interval_ms``, replacing any earlier timer.

        A zero or missing interval means the default.

        Raises:
            ValueError: If the interval is negative
        """
        if interval_ms is not None and interval_ms < 0:
            raise ValueError(f'Refresh interval must not be negative: {interval_ms}')
        interval_ms = interval_ms or DEFAULT_REFRESH_INTERVAL_MS

        # The old timer is cancelled outside the lock: cancel() joins its
        # thread, whose callback takes the lock.
        with self._lock:
            previous = self._refresh_timer
            self._refresh_timer = self.scheduler.schedule(interval_ms / 1000.0, self._tick)
        if previous is not None:
            previous.cancel()
        logger.info("Auto-refreshing printers every %d ms", interval_ms)

    def stop_auto_refresh(self):
        """Cancel the refresh timer, if any."""
        with self._lock:
            previous, self._refresh_timer = self._refresh_timer, None
        if previous is not None:
            previous.cancel()

    # =========================================================================
    # Printing
    # =========================================================================

    def print(self, request: PrintRequest) -> 'Future[JobHandle]':
        """
        Submit a job to a known printer.

        Returns:
            Future resolving to the job handle. Fails with NotFoundError if
            the printer is unknown, SnapshotError if the printer list cannot
            be read, or SubmissionError if ``lp`` fails.

        Raises:
            ValidationError: If the request is incomplete
        """
        validate(request)

        try:
            printer = self.get_printer(request.printer)
        except SnapshotError as e:
            return failed(e)
        if printer is None:
            return failed(NotFoundError(request.printer))

        return self.submitter.submit(request)

    def print_direct(self, data: Union[str, bytes, None] = None, printer: str = '',
                     success: Optional[Callable[[JobHandle], object]] = None,
                     error: Optional[Callable[[BaseException], object]] = None,
                     type: Optional[str] = None,
                     options: Optional[Mapping[str, object]] = None):
        """
        Submit raw data and report the outcome through callbacks.

        Args:
            data: Payload streamed to ``lp``
            printer: Target printer name
            success: Called with the job handle
            error: Called with the exception on any failure (required)
            type: Document type (defaults to RAW)
            options: Extra ``-o key=value`` options

        Raises:
            TypeError: If no error callback is given
        """
        if error is None:
            raise TypeError('No error callback provided')
        if success is None:
            error(ValidationError('no success callback'))
            return
        if not data:
            error(ValidationError('no data'))
            return
        if not printer:
            error(ValidationError('no printer'))
            return

        try:
            request = PrintRequest(printer=printer, data=data, type=type,
                                   args=option_arguments(options))
            validate(request)
        except ValueError as e:
            error(e)
            return

        try:
            found = self.get_printer(printer)
        except SnapshotError as e:
            error(e)
            return
        if found is None:
            error(NotFoundError(printer))
            return
        self.submitter.submit_direct(request, success, error)
