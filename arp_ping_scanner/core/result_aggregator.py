"""Assembles dispatcher outcomes into the ordered ScanResultSet."""

from datetime import datetime
from typing import Dict, Optional, Sequence

from .data_models import AddressBlock, HostOutcome, ScanResultSet
from ..utils.error_handler import AggregationError
from ..utils.logger import Logger


class ResultAggregator:
    """
    Orders outcomes by the original address sequence.

    Completion order is irrelevant: the position of every outcome is taken
    from ``addresses``.
    """

    def __init__(self, logger: Optional[Logger] = None):
        self.logger = logger

    def aggregate(
        self,
        addresses: Sequence[str],
        outcomes: Dict[str, HostOutcome],
        address_block: Optional[AddressBlock] = None,
        started_at: Optional[datetime] = None,
        finished_at: Optional[datetime] = None,
        concurrency_limit: Optional[int] = None,
    ) -> ScanResultSet:
        """
        Build the result set.

        Raises:
            AggregationError: If any address has no outcome
        """
        missing = [address for address in addresses if address not in outcomes]
        if missing:
            raise AggregationError(
                f"{len(missing)} addresses have no probe outcome (first: {missing[0]})"
            )

        result_set = ScanResultSet(
            [outcomes[address] for address in addresses],
            address_block=address_block,
            started_at=started_at,
            finished_at=finished_at,
            concurrency_limit=concurrency_limit,
        )

        if self.logger:
            self.logger.debug(
                f"Aggregated {len(result_set)} hosts, {len(result_set.reachable())} reachable"
            )
        return result_set
