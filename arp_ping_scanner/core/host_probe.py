"""
Per-host composite probe.

A host is probed in stages: reachability first, then, only for hosts that
answered, a reverse name lookup and a link-address cache lookup. Every
sub-probe returns a ProbeResult; ``HostProbe._to_outcome`` is the one place
where those results become the sentinel strings stored on a HostOutcome.
No sub-probe is retried and no sub-probe failure escapes this module.
"""

import threading
from typing import Dict, Optional

from .data_models import (
    HostOutcome,
    ProbeResult,
    ProbeStatus,
    NOT_APPLICABLE,
    UNKNOWN_NAME,
    LINK_ADDRESS_NOT_FOUND,
    LINK_ADDRESS_ERROR_PREFIX,
)
from ..scanners.base_scanner import ReachabilityProber, NameResolver, LinkAddressResolver
from ..utils.logger import Logger

DEFAULT_PING_TIMEOUT = 1.0


class HostProbe:
    """
    Produces one HostOutcome for one address.

    Instances hold no per-host state and are shared by all worker threads.
    """

    def __init__(
        self,
        reachability: ReachabilityProber,
        name_resolver: NameResolver,
        link_resolver: LinkAddressResolver,
        timeout: float = DEFAULT_PING_TIMEOUT,
        logger: Optional[Logger] = None,
    ):
        """
        Initialize the host probe.

        Args:
            reachability: Echo-request backend
            name_resolver: Reverse name lookup backend
            link_resolver: Link-address cache backend
            timeout: Echo timeout in seconds
            logger: Logger for contained failures (debug level)
        """
        self.reachability = reachability
        self.name_resolver = name_resolver
        self.link_resolver = link_resolver
        self.timeout = timeout
        self.logger = logger
        self._warned_lock = threading.Lock()
        self._reachability_warned = False

    def __call__(self, address: str) -> HostOutcome:
        return self.probe(address)

    def probe(self, address: str) -> HostOutcome:
        results: Dict[str, ProbeResult] = {
            "reachability": self._run("reachability", address,
                                      lambda: self.reachability.probe(address, self.timeout)),
        }

        if results["reachability"].ok and results["reachability"].value:
            results["name"] = self._run("name", address,
                                        lambda: self.name_resolver.resolve(address))
            results["link_address"] = self._run("link_address", address,
                                                lambda: self.link_resolver.lookup(address))

        return self._to_outcome(address, results)

    def _run(self, probe_name: str, address: str, call) -> ProbeResult:
        """Run one sub-probe, turning any exception into a FAILED result."""
        try:
            result = call()
        except Exception as e:
            result = ProbeResult.failed(str(e) or type(e).__name__)

        if not isinstance(result, ProbeResult):
            result = ProbeResult.failed(f"{probe_name} probe returned {type(result).__name__}")

        if not result.ok and self.logger:
            self.logger.debug(
                f"{probe_name} probe for {address}: {result.status.value}",
                reason=result.reason,
            )
            if probe_name == "reachability" and result.status is ProbeStatus.FAILED:
                self._warn_reachability_failure(address, result.reason)
        return result

    def _warn_reachability_failure(self, address: str, reason: Optional[str]) -> None:
        """Warn once per probe instance; later failures stay at debug level."""
        with self._warned_lock:
            if self._reachability_warned:
                return
            self._reachability_warned = True
        self.logger.warning(
            f"Reachability check failed for {address}: {reason}. "
            "Hosts with the same problem will be reported as unreachable."
        )

    @staticmethod
    def _to_outcome(address: str, results: Dict[str, ProbeResult]) -> HostOutcome:
        reachability = results["reachability"]
        if not (reachability.ok and reachability.value):
            return HostOutcome(
                address=address,
                display_name=NOT_APPLICABLE,
                link_address=NOT_APPLICABLE,
                reachable=False,
                probe_results=results,
            )

        name = results["name"]
        display_name = name.value if name.ok and name.value else UNKNOWN_NAME

        link = results["link_address"]
        if link.ok and link.value:
            link_address = link.value
        elif link.status is ProbeStatus.FAILED:
            link_address = f"{LINK_ADDRESS_ERROR_PREFIX}{link.reason}"
        else:
            link_address = LINK_ADDRESS_NOT_FOUND

        return HostOutcome(
            address=address,
            display_name=display_name,
            link_address=link_address,
            reachable=True,
            probe_results=results,
        )
