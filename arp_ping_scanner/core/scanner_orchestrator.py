"""
Scanner Orchestrator for the ARP Ping Scanner.

This module wires the scanning pipeline together: range expansion, bounded
dispatch of host probes, and ordered aggregation. Range and configuration
errors are raised before the first probe is sent; once probing starts, the
scan always completes with one outcome per address.
"""

from datetime import datetime
from typing import Optional

from .data_models import AddressBlock, ScanResultSet
from .dispatcher import BoundedDispatcher, ProgressCallback
from .host_probe import HostProbe
from .range_expander import parse_address_block, expand_address_block
from .result_aggregator import ResultAggregator
from ..config.config_loader import ScanConfig
from ..scanners.arp_cache import create_link_address_resolver
from ..scanners.base_scanner import ReachabilityProber, NameResolver, LinkAddressResolver
from ..scanners.name_resolver import SocketNameResolver
from ..scanners.ping_scanner import create_reachability_prober
from ..utils.error_handler import AddressLimitExceeded
from ..utils.logger import Logger, get_logger


class ScannerOrchestrator:
    """
    Orchestrates a complete scan of one address block.

    Probe backends default to the ones named in the ScanConfig and can be
    replaced individually, e.g. with test doubles.
    """

    def __init__(
        self,
        config: Optional[ScanConfig] = None,
        reachability: Optional[ReachabilityProber] = None,
        name_resolver: Optional[NameResolver] = None,
        link_resolver: Optional[LinkAddressResolver] = None,
        logger: Optional[Logger] = None,
    ):
        """
        Initialize the scanner orchestrator.

        Args:
            config: Scan configuration (defaults to ScanConfig())
            reachability: Echo-request backend override
            name_resolver: Reverse lookup backend override
            link_resolver: Link-address cache backend override
            logger: Logger instance
        """
        self.config = config or ScanConfig()
        self.logger = logger or get_logger(__name__)

        self.reachability = reachability or create_reachability_prober(
            self.config.reachability_method, self.logger
        )
        self.name_resolver = name_resolver or SocketNameResolver(self.logger)
        self.link_resolver = link_resolver or create_link_address_resolver(
            self.config.link_address_method, self.logger, self.config.command_timeout
        )

        self.host_probe = HostProbe(
            self.reachability,
            self.name_resolver,
            self.link_resolver,
            timeout=self.config.ping_timeout,
            logger=self.logger,
        )
        self.aggregator = ResultAggregator(self.logger)

    def validate(self, address_block: str) -> AddressBlock:
        """
        Parse a CIDR string and apply the address-count guard.

        Raises:
            InvalidRangeFormat: Malformed range string
            UnsupportedAddressFamily: Non-IPv4 range
            AddressLimitExceeded: Block larger than config.max_addresses
        """
        block = parse_address_block(address_block)
        max_addresses = self.config.max_addresses
        if max_addresses is not None and block.address_count > max_addresses:
            raise AddressLimitExceeded(
                f"{block.cidr} holds {block.address_count} addresses, "
                f"more than the configured maximum of {max_addresses}"
            )
        return block

    def scan(
        self,
        address_block: str,
        concurrency_limit: Optional[int] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> ScanResultSet:
        """
        Scan every address of a CIDR block.

        Args:
            address_block: CIDR string, e.g. "192.168.10.0/24"
            concurrency_limit: Maximum probes in flight, defaults to the config value
            progress_callback: Called as (completed, total, outcome)

        Returns:
            ScanResultSet ordered like the expanded address block

        Raises:
            InvalidRangeFormat: Malformed range string
            UnsupportedAddressFamily: Non-IPv4 range
            AddressLimitExceeded: Block larger than config.max_addresses
            ConfigurationError: Concurrency limit below 1
        """
        limit = self.config.concurrency_limit if concurrency_limit is None else concurrency_limit
        dispatcher = BoundedDispatcher(limit, self.logger)

        block = self.validate(address_block)
        addresses = expand_address_block(block)
        self.logger.debug(
            f"Scanning {block.cidr}: {len(addresses)} addresses "
            f"({block.network_address} - {block.broadcast_address})"
        )

        started_at = datetime.now()
        outcomes = dispatcher.dispatch(addresses, self.host_probe, progress_callback)
        finished_at = datetime.now()

        return self.aggregator.aggregate(
            addresses,
            outcomes,
            address_block=block,
            started_at=started_at,
            finished_at=finished_at,
            concurrency_limit=limit,
        )


def scan(
    address_block: str,
    concurrency_limit: Optional[int] = None,
    reachability: Optional[ReachabilityProber] = None,
    name_resolver: Optional[NameResolver] = None,
    link_resolver: Optional[LinkAddressResolver] = None,
    config: Optional[ScanConfig] = None,
    logger: Optional[Logger] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> ScanResultSet:
    """
    Scan ``address_block`` with at most ``concurrency_limit`` probes in flight.

    The limit defaults to ``config.concurrency_limit`` (100 unless configured).
    """
    orchestrator = ScannerOrchestrator(
        config=config,
        reachability=reachability,
        name_resolver=name_resolver,
        link_resolver=link_resolver,
        logger=logger,
    )
    return orchestrator.scan(address_block, concurrency_limit, progress_callback)
