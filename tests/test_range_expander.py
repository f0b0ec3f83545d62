import ipaddress

import pytest

from arp_ping_scanner.core.range_expander import (
    expand_address_block,
    expand_range,
    parse_address_block,
)
from arp_ping_scanner.utils.error_handler import InvalidRangeFormat, UnsupportedAddressFamily


def test_slash_30_expands_to_four_addresses():
    assert expand_range("192.168.1.0/30") == [
        "192.168.1.0",
        "192.168.1.1",
        "192.168.1.2",
        "192.168.1.3",
    ]


def test_slash_32_is_a_single_address():
    block = parse_address_block("203.0.113.5/32")
    assert block.network_address == block.broadcast_address == "203.0.113.5"
    assert expand_address_block(block) == ["203.0.113.5"]


@pytest.mark.parametrize("prefix", range(20, 33))
def test_expansion_covers_network_to_broadcast(prefix):
    cidr = f"172.16.37.201/{prefix}"
    addresses = expand_range(cidr)
    network = ipaddress.IPv4Network(cidr, strict=False)

    assert len(addresses) == 2 ** (32 - prefix)
    assert addresses[0] == str(network.network_address)
    assert addresses[-1] == str(network.broadcast_address)
    as_ints = [int(ipaddress.IPv4Address(a)) for a in addresses]
    assert all(a < b for a, b in zip(as_ints, as_ints[1:]))


@pytest.mark.parametrize("prefix", [0, 1, 8, 16])
def test_large_blocks_report_count_without_expanding(prefix):
    block = parse_address_block(f"10.20.30.40/{prefix}")
    network = ipaddress.IPv4Network(f"10.20.30.40/{prefix}", strict=False)

    assert block.address_count == 2 ** (32 - prefix)
    assert block.network_address == str(network.network_address)
    assert block.broadcast_address == str(network.broadcast_address)


def test_host_bits_are_masked_off():
    block = parse_address_block("192.168.10.77/24")
    assert block.base_address == "192.168.10.77"
    assert block.cidr == "192.168.10.0/24"
    assert block.broadcast_address == "192.168.10.255"


def test_whitespace_around_slash_is_accepted():
    assert expand_range("10.0.0.4 / 31") == ["10.0.0.4", "10.0.0.5"]


@pytest.mark.parametrize("text", [
    "not-a-cidr",
    "192.168.1.0",
    "192.168.1.0/",
    "/24",
    "192.168.1.0/abc",
    "",
])
def test_malformed_strings_raise_invalid_range_format(text):
    with pytest.raises(InvalidRangeFormat):
        parse_address_block(text)


@pytest.mark.parametrize("text", ["256.1.1.1/24", "1.2.3/24", "10.0.0.0/33"])
def test_bad_address_or_prefix_raise_invalid_range_format(text):
    with pytest.raises(InvalidRangeFormat):
        parse_address_block(text)


@pytest.mark.parametrize("text", ["::1/64", "fe80::1/64", "2001:DB8::/32"])
def test_ipv6_is_rejected_as_unsupported(text):
    with pytest.raises(UnsupportedAddressFamily):
        parse_address_block(text)
