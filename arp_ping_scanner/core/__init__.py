"""
Core scanning engine: range expansion, host probing, bounded dispatch and
result aggregation.
"""

from .data_models import (
    AddressBlock,
    HostOutcome,
    ProbeResult,
    ProbeStatus,
    ScanResultSet,
)
from .range_expander import parse_address_block, expand_address_block, expand_range
from .host_probe import HostProbe
from .dispatcher import BoundedDispatcher
from .result_aggregator import ResultAggregator

__all__ = [
    'AddressBlock',
    'HostOutcome',
    'ProbeResult',
    'ProbeStatus',
    'ScanResultSet',
    'parse_address_block',
    'expand_address_block',
    'expand_range',
    'HostProbe',
    'BoundedDispatcher',
    'ResultAggregator',
]
