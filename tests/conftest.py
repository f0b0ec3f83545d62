import threading
import time

import pytest

from arp_ping_scanner.core.data_models import ProbeResult
from arp_ping_scanner.scanners.base_scanner import (
    LinkAddressResolver,
    NameResolver,
    ReachabilityProber,
)
from arp_ping_scanner.utils.logger import Logger, LogLevel


class FakeReachability(ReachabilityProber):
    """Reports the addresses in ``reachable`` as up, optionally with a delay."""

    def __init__(self, reachable=(), delay=None):
        super().__init__()
        self.reachable = set(reachable)
        self.delay = delay
        self.calls = []
        self._lock = threading.Lock()

    def probe(self, address, timeout):
        with self._lock:
            self.calls.append((address, timeout))
        if self.delay:
            time.sleep(self.delay(address))
        if address in self.reachable:
            return ProbeResult.success(True)
        return ProbeResult.not_found("no echo reply")


class FakeNameResolver(NameResolver):
    def __init__(self, names=None, error=None):
        super().__init__()
        self.names = names or {}
        self.error = error
        self.calls = []

    def resolve(self, address):
        self.calls.append(address)
        if self.error:
            raise self.error
        if address in self.names:
            return ProbeResult.success(self.names[address])
        return ProbeResult.not_found("no PTR record")


class FakeLinkResolver(LinkAddressResolver):
    def __init__(self, entries=None, error=None):
        super().__init__()
        self.entries = entries or {}
        self.error = error
        self.calls = []

    def lookup(self, address):
        self.calls.append(address)
        if self.error:
            raise self.error
        if address in self.entries:
            return ProbeResult.success(self.entries[address])
        return ProbeResult.not_found(f"no cache entry for {address}")


@pytest.fixture
def quiet_logger():
    return Logger("test", min_level=LogLevel.ERROR)


@pytest.fixture
def fake_reachability():
    return FakeReachability


@pytest.fixture
def fake_name_resolver():
    return FakeNameResolver


@pytest.fixture
def fake_link_resolver():
    return FakeLinkResolver
