from datetime import datetime, timedelta

import pytest

from access.controller import AccessController
from access.entry import Entry
from access.registry import EntryRegistry
from config.loader import Settings
from hardware.pins import INPUT, OUTPUT, PULL_UP, HIGH, LOW

ROWS = [31, 33, 35, 37]
COLS = [32, 36, 38, 40]
RELAY_PIN = 11
SENSOR_PIN = 13

# Monday 10:00
MONDAY_10AM = datetime(2026, 10, 19, 10, 0, 0)


class FakeClock:
    def __init__(self, now=MONDAY_10AM):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class FakeScheduler:
    def __init__(self):
        self.pending = []

    def call_later(self, delay, fn, *args):
        self.pending.append((delay, fn, args))

    def fire_all(self):
        pending, self.pending = self.pending, []
        for _, fn, args in pending:
            fn(*args)

    def fire(self, index):
        _, fn, args = self.pending.pop(index)
        fn(*args)


class FakeNotifier:
    def __init__(self):
        self.sent = []

    def send(self, alert_group, message):
        self.sent.append((alert_group, message))

    def send_support(self, message):
        self.send("support", message)

    def messages(self):
        return [m for _, m in self.sent]


class FakeRelay:
    def __init__(self):
        self.pulses = 0

    def trigger_pulse(self):
        self.pulses += 1
        return True


class FakeSensor:
    def __init__(self, open=False):
        self.open = open

    def is_door_open(self):
        return self.open


class FakeGpio:
    """Simulates a matrix keypad wired to the pins.

    A pressed key connects its row and column: whichever side is an input
    reads high when the other side is driven or pulled high.
    """

    def __init__(self):
        self.config = {}
        self.levels = {}
        self.writes = []
        self.edges = {}
        self.released = []
        self.pressed = set()
        self.cleaned = False

    def configure_pin(self, pin, direction, pull=None, initial=None):
        self.config[pin] = (direction, pull)
        if direction == OUTPUT:
            self.levels[pin] = HIGH if initial else LOW
        else:
            self.levels.pop(pin, None)

    def _driven_high(self, pin):
        direction, pull = self.config.get(pin, (INPUT, None))
        if direction == OUTPUT:
            return self.levels.get(pin) == HIGH
        return pull == PULL_UP

    def read_pin(self, pin):
        for row, col in self.pressed:
            if pin == row and self._driven_high(col):
                return HIGH
            if pin == col and self._driven_high(row):
                return HIGH
        return self.levels.get(pin, LOW)

    def write_pin(self, pin, level):
        self.levels[pin] = level
        self.writes.append((pin, level))

    def on_edge(self, pin, callback):
        self.edges[pin] = callback

    def release_pin(self, pin):
        self.released.append(pin)
        self.config[pin] = (INPUT, None)

    def cleanup(self):
        self.cleaned = True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def relay():
    return FakeRelay()


@pytest.fixture
def sensor():
    return FakeSensor()


@pytest.fixture
def gpio():
    return FakeGpio()


@pytest.fixture
def settings():
    return Settings(
        rows=ROWS,
        cols=COLS,
        relay_pin=RELAY_PIN,
        sensor_pin=SENSOR_PIN,
        timeout_msec=5000,
        testmode_timeout_msec=120000,
        relay_delay_msec=500,
        close_helper_seconds=90,
        temp_code_timeout_seconds=120,
        temp_code_ttl_minutes=30,
        alerts={"family": ["5551230001"], "support": ["5551230002"]},
    )


@pytest.fixture
def family():
    return Entry(name="Family", code="2468", alert="family")


@pytest.fixture
def walker():
    return Entry(
        name="Dog walker",
        code="13579",
        alert="family",
        valid_days=frozenset(["monday", "friday"]),
        valid_hours=(11, 14),
        temp_code_allowed=True,
    )


@pytest.fixture
def installer():
    return Entry(name="Installer", code="9999", alert="support", testmode=True)


@pytest.fixture
def registry(family, walker, installer):
    return EntryRegistry([family, walker, installer])


@pytest.fixture
def controller(registry, settings, relay, sensor, notifier, scheduler, clock):
    return AccessController(registry, settings, relay, sensor, notifier, scheduler, clock=clock)
