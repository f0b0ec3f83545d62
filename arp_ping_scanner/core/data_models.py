"""
Core data models and enums for the ARP Ping Scanner.

This module defines the data structures shared by the scanning engine:
the parsed address block, the discriminated result returned by every
sub-probe, the per-host outcome and the ordered result set handed to
reporters.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from collections.abc import Sequence
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union


NOT_APPLICABLE = "N/A"
UNKNOWN_NAME = "Unknown"
LINK_ADDRESS_NOT_FOUND = "Not Found"
LINK_ADDRESS_ERROR_PREFIX = "Error: "


class ProbeStatus(Enum):
    """Outcome class of a single sub-probe."""
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class ProbeResult:
    """
    Discriminated result of one sub-probe.

    Attributes:
        status: Whether the probe produced a value, found nothing, or failed
        value: Probe value on success (bool for reachability, str otherwise)
        reason: Human-readable failure description when status is not SUCCESS
    """
    status: ProbeStatus
    value: Any = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, value: Any) -> "ProbeResult":
        return cls(ProbeStatus.SUCCESS, value)

    @classmethod
    def not_found(cls, reason: Optional[str] = None) -> "ProbeResult":
        return cls(ProbeStatus.NOT_FOUND, None, reason)

    @classmethod
    def failed(cls, reason: str) -> "ProbeResult":
        return cls(ProbeStatus.FAILED, None, reason)

    @property
    def ok(self) -> bool:
        return self.status is ProbeStatus.SUCCESS


@dataclass(frozen=True)
class AddressBlock:
    """
    An IPv4 network expressed as base address plus prefix length.

    Addresses are kept as 32-bit integers; ``network_address`` and
    ``broadcast_address`` are the dotted-decimal renderings.
    """
    base_address: str
    prefix_length: int
    network: int
    broadcast: int

    @property
    def network_address(self) -> str:
        return int_to_dotted(self.network)

    @property
    def broadcast_address(self) -> str:
        return int_to_dotted(self.broadcast)

    @property
    def address_count(self) -> int:
        return 2 ** (32 - self.prefix_length)

    @property
    def cidr(self) -> str:
        return f"{self.network_address}/{self.prefix_length}"

    def __str__(self) -> str:
        return self.cidr


@dataclass(frozen=True)
class HostOutcome:
    """
    Result of probing one address.

    Attributes:
        address: Dotted-decimal IPv4 address
        display_name: Resolved host name, "Unknown", or "N/A" when unreachable
        link_address: Hardware address token, "Not Found", "Error: ...",
            or "N/A" when unreachable
        reachable: Whether the host answered the echo request
        probe_results: Raw sub-probe results keyed by probe name; kept for
            inspection, read-only and excluded from comparison
    """
    address: str
    display_name: str
    link_address: str
    reachable: bool
    probe_results: Mapping[str, ProbeResult] = field(
        default_factory=dict, compare=False, repr=False
    )

    def __post_init__(self):
        object.__setattr__(self, "probe_results", MappingProxyType(dict(self.probe_results)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "display_name": self.display_name,
            "link_address": self.link_address,
            "reachable": self.reachable,
        }


class ScanResultSet(Sequence):
    """
    Ordered, immutable collection of host outcomes for one scan.

    Outcomes follow the address block's enumeration order. ``reachable()``
    returns the subset of hosts that answered, in the same order.
    """

    def __init__(
        self,
        outcomes: Sequence[HostOutcome],
        address_block: Optional[AddressBlock] = None,
        started_at: Optional[datetime] = None,
        finished_at: Optional[datetime] = None,
        concurrency_limit: Optional[int] = None,
    ):
        self._outcomes: Tuple[HostOutcome, ...] = tuple(outcomes)
        self.address_block = address_block
        self.started_at = started_at
        self.finished_at = finished_at
        self.concurrency_limit = concurrency_limit

    def __getitem__(self, index: Union[int, slice]):
        return self._outcomes[index]

    def __len__(self) -> int:
        return len(self._outcomes)

    def __iter__(self) -> Iterator[HostOutcome]:
        return iter(self._outcomes)

    def __repr__(self) -> str:
        return (
            f"ScanResultSet(block={self.address_block}, hosts={len(self)}, "
            f"reachable={len(self.reachable())})"
        )

    @property
    def addresses(self) -> List[str]:
        return [outcome.address for outcome in self._outcomes]

    @property
    def duration(self) -> float:
        """Scan duration in seconds, 0.0 when timing is unknown."""
        if self.started_at and self.finished_at:
            return (self.finished_at - self.started_at).total_seconds()
        return 0.0

    def reachable(self) -> Tuple[HostOutcome, ...]:
        return tuple(outcome for outcome in self._outcomes if outcome.reachable)


def int_to_dotted(value: int) -> str:
    """Render a 32-bit integer as a dotted-decimal IPv4 address."""
    return ".".join(str((value >> shift) & 0xFF) for shift in (24, 16, 8, 0))
