import threading
import time

import pytest

from arp_ping_scanner.core.data_models import HostOutcome
from arp_ping_scanner.core.dispatcher import BoundedDispatcher
from arp_ping_scanner.core.range_expander import expand_range
from arp_ping_scanner.utils.error_handler import ConfigurationError


class ActiveCounter:
    """Probe double that records the highest number of concurrent calls."""

    def __init__(self, delay=0.01):
        self.delay = delay
        self.active = 0
        self.max_active = 0
        self.calls = 0
        self._lock = threading.Lock()

    def __call__(self, address):
        with self._lock:
            self.active += 1
            self.calls += 1
            self.max_active = max(self.max_active, self.active)
        try:
            time.sleep(self.delay)
            return HostOutcome(address, "N/A", "N/A", False)
        finally:
            with self._lock:
                self.active -= 1


@pytest.mark.parametrize("limit", [1, 3, 8])
def test_active_probes_never_exceed_limit(limit):
    addresses = expand_range("10.1.0.0/26")
    counter = ActiveCounter()

    outcomes = BoundedDispatcher(limit).dispatch(addresses, counter)

    assert counter.calls == len(addresses)
    assert 1 <= counter.max_active <= limit
    assert set(outcomes) == set(addresses)


def test_gate_is_released_after_failures():
    addresses = expand_range("10.2.0.0/28")

    def flaky(address):
        if address.endswith((".1", ".5", ".9")):
            raise RuntimeError("boom")
        return HostOutcome(address, "N/A", "N/A", False)

    outcomes = BoundedDispatcher(2).dispatch(addresses, flaky)

    assert len(outcomes) == 16
    failed = outcomes["10.2.0.5"]
    assert failed == HostOutcome("10.2.0.5", "N/A", "N/A", False)
    assert failed.probe_results["reachability"].reason == "boom"


def test_progress_callback_sees_every_completion():
    addresses = expand_range("10.3.0.0/29")
    seen = []

    BoundedDispatcher(4).dispatch(
        addresses,
        lambda a: HostOutcome(a, "N/A", "N/A", False),
        progress_callback=lambda done, total, outcome: seen.append((done, total)),
    )

    assert sorted(seen) == [(i, 8) for i in range(1, 9)]


def test_empty_address_list_returns_nothing():
    assert BoundedDispatcher(5).dispatch([], lambda a: None) == {}


@pytest.mark.parametrize("limit", [0, -3, 2.5, True])
def test_invalid_limits_are_rejected(limit):
    with pytest.raises(ConfigurationError):
        BoundedDispatcher(limit)


def test_interrupt_cancels_queued_probes():
    addresses = expand_range("10.4.0.0/24")
    calls = []
    lock = threading.Lock()

    def interrupted_first(address):
        with lock:
            calls.append(address)
        if address == "10.4.0.0":
            raise KeyboardInterrupt
        time.sleep(0.02)
        return HostOutcome(address, "N/A", "N/A", False)

    with pytest.raises(KeyboardInterrupt):
        BoundedDispatcher(2).dispatch(addresses, interrupted_first)

    assert len(calls) < 16
