"""
Probe backends for the ARP Ping Scanner.

This package contains the sub-probe interfaces and their implementations:
reachability (system ping, scapy ICMP), reverse name lookup and link-address
cache lookup (arp, ip neigh).
"""

from .base_scanner import ReachabilityProber, NameResolver, LinkAddressResolver
from .ping_scanner import PingCommandProber, ScapyICMPProber, create_reachability_prober
from .name_resolver import SocketNameResolver
from .arp_cache import ArpCommandResolver, IpNeighResolver, create_link_address_resolver

__all__ = [
    'ReachabilityProber',
    'NameResolver',
    'LinkAddressResolver',
    'PingCommandProber',
    'ScapyICMPProber',
    'create_reachability_prober',
    'SocketNameResolver',
    'ArpCommandResolver',
    'IpNeighResolver',
    'create_link_address_resolver',
]
