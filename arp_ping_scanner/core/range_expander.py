"""
CIDR range expansion for the ARP Ping Scanner.

Validation happens in two phases: a syntax check that accepts both IPv4 and
IPv6 looking literals, followed by a semantic check that the address is
IPv4. IPv6 ranges are rejected with ``UnsupportedAddressFamily`` instead of
being reported as malformed.

Expansion includes both the network and the broadcast address. No size cap
is applied here; see ``ScanConfig.max_addresses``.
"""

import ipaddress
import re
from typing import List, Optional

from .data_models import AddressBlock, int_to_dotted
from ..utils.error_handler import InvalidRangeFormat, UnsupportedAddressFamily
from ..utils.logger import Logger

CIDR_PATTERN = re.compile(
    r"^(?P<adr>([\d.]+)|([\da-f:]+(:[\d.]+)?(%\w+)?))[ \t]*/[ \t]*(?P<maskLen>\d+)$",
    re.IGNORECASE,
)

_ALL_ONES = 0xFFFFFFFF


def parse_address_block(range_string: str) -> AddressBlock:
    """
    Parse ``<address>/<prefixLength>`` into an AddressBlock.

    Args:
        range_string: CIDR string, e.g. "192.168.10.0/24"

    Returns:
        AddressBlock with network and broadcast computed

    Raises:
        InvalidRangeFormat: If the string is not an address/prefix pair, the
            address is not an IP literal, or the prefix is out of range
        UnsupportedAddressFamily: If the address is not IPv4
    """
    if not isinstance(range_string, str):
        raise InvalidRangeFormat(f"Invalid CIDR format: {range_string!r}")

    match = CIDR_PATTERN.match(range_string.strip())
    if not match:
        raise InvalidRangeFormat(f"Invalid CIDR format: {range_string!r}")

    address_text = match.group("adr")
    prefix_length = int(match.group("maskLen"))

    try:
        base_address = ipaddress.ip_address(address_text.split("%", 1)[0])
    except ValueError as e:
        raise InvalidRangeFormat(
            f"Invalid CIDR format: {range_string!r} ({e})"
        ) from e

    if base_address.version != 4:
        raise UnsupportedAddressFamily(
            f"Only IPv4 is supported, got IPv{base_address.version} range {range_string!r}"
        )

    if not 0 <= prefix_length <= 32:
        raise InvalidRangeFormat(
            f"Invalid CIDR format: prefix length {prefix_length} is outside 0-32"
        )

    mask = (_ALL_ONES << (32 - prefix_length)) & _ALL_ONES
    network = int(base_address) & mask
    broadcast = network | (~mask & _ALL_ONES)

    return AddressBlock(
        base_address=str(base_address),
        prefix_length=prefix_length,
        network=network,
        broadcast=broadcast,
    )


def expand_address_block(block: AddressBlock) -> List[str]:
    """Return every address from network to broadcast, ascending."""
    return [int_to_dotted(value) for value in range(block.network, block.broadcast + 1)]


def expand_range(range_string: str, logger: Optional[Logger] = None) -> List[str]:
    """
    Parse and expand a CIDR string in one step.

    Args:
        range_string: CIDR string, e.g. "192.168.1.0/30"
        logger: Optional logger for a summary line

    Returns:
        Ordered list of dotted-decimal addresses
    """
    block = parse_address_block(range_string)
    addresses = expand_address_block(block)
    if logger:
        logger.info(
            f"Expanded {block.cidr} to {len(addresses)} addresses "
            f"({block.network_address} - {block.broadcast_address})"
        )
    return addresses
