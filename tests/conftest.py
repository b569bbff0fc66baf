"""Shared fakes for the test suite."""

from concurrent.futures import Future

import pytest

from cups_print_service.errors import ExecutionError
from cups_print_service.runner import BaseRunner


LPSTAT_OUTPUT = {
    'lpstat -p': (
        "printer HP_LaserJet is idle.  enabled since Mon Dec 18 10:00:00 2023\n"
        "printer ZPL-PRINTER is idle.  enabled since Mon Dec 18 10:00:00 2023\n"
        "\tReady to print.\n"
    ),
    'lpstat -a': (
        "HP_LaserJet accepting requests since Mon Dec 18 10:00:00 2023\n"
        "ZPL-PRINTER not accepting requests since Mon Dec 18 10:00:00 2023 -\n"
        "\tRejecting Jobs\n"
    ),
    'lpstat -s': (
        "system default destination: HP_LaserJet\n"
        "device for HP_LaserJet: ipp://192.168.1.20/ipp/print\n"
        "device for ZPL-PRINTER: usb://Zebra/ZD421?serial=D2J1234\n"
    ),
    'lpstat -d': "system default destination: HP_LaserJet\n",
    'lpstat -l -p': (
        "printer HP_LaserJet is idle.  enabled since Mon Dec 18 10:00:00 2023\n"
        "\tForm mounted:\n"
        "\tContent types: any\n"
        "\tDescription: HP LaserJet 4000\n"
        "\tLocation: Office 2\n"
        "\tConnection: direct\n"
        "printer ZPL-PRINTER is idle.  enabled since Mon Dec 18 10:00:00 2023\n"
        "\tDescription: Zebra ZD421\n"
        "\tConnection: direct\n"
    ),
}

LP_CONFIRMATION = "request id is ZPL-PRINTER-92 (0 file(s))\n"


class SpyRunner(BaseRunner):
    """Records every command and answers from canned output.

    Asynchronous runs complete inline, so done-callbacks fire before the
    call returns.
    """

    def __init__(self, outputs=None):
        super().__init__(max_workers=1)
        self.outputs = dict(outputs or {})
        self.failures = {}
        self.calls = []

    def _execute(self, command, args, payload=None):
        self.calls.append((command, list(args), payload))
        key = ' '.join([command, *args])
        for candidate in (key, command):
            if candidate in self.failures:
                return 1, '', self.failures[candidate]
        for candidate in (key, command):
            if candidate in self.outputs:
                return 0, self.outputs[candidate], ''
        return 0, '', ''

    def _inline(self, command, args, payload):
        future = Future()
        try:
            future.set_result(self._run(command, list(args), payload))
        except ExecutionError as e:
            future.set_exception(e)
        return future

    def run_async(self, command, args=()):
        return self._inline(command, args, None)

    def run_async_with_input(self, command, payload, args=()):
        if isinstance(payload, str):
            payload = payload.encode('utf-8')
        return self._inline(command, args, payload)

    def commands(self, command=None):
        return [c for c in self.calls if command is None or c[0] == command]

    def count(self, command, args):
        return sum(1 for c in self.calls if c[0] == command and c[1] == list(args))


class HeldRunner(SpyRunner):
    """Like SpyRunner, but asynchronous runs stay pending until resolved."""

    def __init__(self, outputs=None):
        super().__init__(outputs)
        self.pending = []

    def run_async(self, command, args=()):
        future = Future()
        self.pending.append((command, list(args), future))
        return future

    def resolve(self, batch, outputs):
        """Complete the given pending runs using ``outputs``."""
        for command, args, future in batch:
            future.set_result(outputs.get(' '.join([command, *args]), ''))


class FakeTimer:
    def __init__(self, interval, callback, next_fire):
        self.interval = interval
        self.callback = callback
        self.next_fire = next_fire
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Scheduler driven by a manual clock."""

    def __init__(self):
        self.now = 0.0
        self.timers = []

    def schedule(self, interval, callback):
        timer = FakeTimer(interval, callback, self.now + interval)
        self.timers.append(timer)
        return timer

    @property
    def active(self):
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds):
        end = self.now + seconds
        while True:
            due = [t for t in self.active if t.next_fire <= end]
            if not due:
                break
            timer = min(due, key=lambda t: t.next_fire)
            self.now = timer.next_fire
            timer.next_fire += timer.interval
            timer.callback()
        self.now = end


@pytest.fixture
def runner():
    spy = SpyRunner(LPSTAT_OUTPUT)
    spy.outputs['lp'] = LP_CONFIRMATION
    yield spy
    spy.shutdown(wait=False)


@pytest.fixture
def scheduler():
    return FakeScheduler()
