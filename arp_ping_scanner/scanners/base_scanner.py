"""
Capability interfaces for the per-host sub-probes.

The host probe talks to three narrow interfaces: a reachability prober, a
reverse name resolver and a link-address cache resolver. Concrete backends
(system ping, scapy ICMP, socket DNS, ``arp``/``ip neigh``) implement them,
and tests substitute doubles. Every method returns a ProbeResult; backends
may raise ProbeError, which the host probe converts to a failed result.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..core.data_models import ProbeResult
from ..utils.logger import Logger


class BaseProber(ABC):
    """Shared logging helpers for probe backends."""

    def __init__(self, logger: Optional[Logger] = None):
        """
        Initialize the prober.

        Args:
            logger: Logger instance for debug output
        """
        self.logger = logger

    def _log_debug(self, message: str) -> None:
        """Log a debug message if logger is available."""
        if self.logger:
            self.logger.debug(message)


class ReachabilityProber(BaseProber):
    """Sends a single echo request and reports whether a reply arrived."""

    @abstractmethod
    def probe(self, address: str, timeout: float) -> ProbeResult:
        """
        Probe one address.

        Args:
            address: Dotted-decimal IPv4 address
            timeout: Seconds to wait for the echo reply

        Returns:
            ProbeResult whose value is True when the host replied. Any
            non-reply is reported as NOT_FOUND or FAILED, never raised.
        """


class NameResolver(BaseProber):
    """Performs a reverse name lookup."""

    @abstractmethod
    def resolve(self, address: str) -> ProbeResult:
        """
        Resolve the display name of an address.

        Returns:
            ProbeResult holding the host name on success
        """


class LinkAddressResolver(BaseProber):
    """Reads the hardware address for an IP from the local neighbour cache."""

    @abstractmethod
    def lookup(self, address: str) -> ProbeResult:
        """
        Look up the link-layer address of an address.

        Returns:
            SUCCESS with the hardware-address token, NOT_FOUND when the cache
            holds no entry, FAILED when the cache could not be queried
        """
