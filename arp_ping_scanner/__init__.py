"""
ARP Ping Scanner

Scans every address of an IPv4 CIDR block with bounded concurrency and
reports, per host, reachability, reverse-resolved name and the MAC address
found in the local ARP cache.
"""

__version__ = "1.0.0"

from .core.data_models import HostOutcome, ScanResultSet
from .core.scanner_orchestrator import ScannerOrchestrator, scan
from .utils.error_handler import InvalidRangeFormat, UnsupportedAddressFamily

__all__ = [
    'HostOutcome',
    'ScanResultSet',
    'ScannerOrchestrator',
    'scan',
    'InvalidRangeFormat',
    'UnsupportedAddressFamily',
]
