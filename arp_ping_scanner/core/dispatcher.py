"""
Bounded-concurrency dispatcher.

Every address is submitted up front to a thread pool; a counting admission
gate of capacity ``K`` is held for the whole lifetime of each probe, so no
more than ``K`` probes are ever active at once. Probes are not batched: a
new probe is admitted as soon as any active probe releases the gate.
"""

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Dict, Optional, Sequence

from .data_models import HostOutcome, ProbeResult, NOT_APPLICABLE
from ..utils.error_handler import ConfigurationError
from ..utils.logger import Logger

DEFAULT_CONCURRENCY_LIMIT = 100

ProgressCallback = Callable[[int, int, HostOutcome], None]


class BoundedDispatcher:
    """
    Runs one probe per address with at most ``concurrency_limit`` in flight.

    The dispatcher owns the in-flight probe tasks; results are returned keyed
    by address and carry no ordering.
    """

    def __init__(
        self,
        concurrency_limit: int = DEFAULT_CONCURRENCY_LIMIT,
        logger: Optional[Logger] = None,
    ):
        if isinstance(concurrency_limit, bool) or not isinstance(concurrency_limit, int):
            raise ConfigurationError(f"Concurrency limit must be an integer, got {concurrency_limit!r}")
        if concurrency_limit < 1:
            raise ConfigurationError(f"Concurrency limit must be at least 1, got {concurrency_limit}")

        self.concurrency_limit = concurrency_limit
        self.logger = logger
        self._gate = threading.BoundedSemaphore(concurrency_limit)

    def dispatch(
        self,
        addresses: Sequence[str],
        probe: Callable[[str], HostOutcome],
        progress_callback: Optional[ProgressCallback] = None,
    ) -> Dict[str, HostOutcome]:
        """
        Probe every address and wait for all of them to finish.

        Args:
            addresses: Ordered address sequence from the range expander
            probe: Callable producing a HostOutcome for one address
            progress_callback: Called as (completed, total, outcome) after
                each probe finishes

        Returns:
            Outcomes keyed by address
        """
        total = len(addresses)
        outcomes: Dict[str, HostOutcome] = {}
        if total == 0:
            return outcomes

        workers = min(self.concurrency_limit, total)
        if self.logger:
            self.logger.debug(f"Dispatching {total} probes with concurrency limit {self.concurrency_limit}")

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="host-probe") as executor:
            future_to_address = {
                executor.submit(self._admitted, probe, address): address
                for address in addresses
            }

            try:
                for completed, future in enumerate(as_completed(future_to_address), start=1):
                    address = future_to_address[future]
                    try:
                        outcome = future.result()
                    except Exception as e:
                        outcome = self._degraded_outcome(address, e)
                    outcomes[address] = outcome

                    if progress_callback:
                        progress_callback(completed, total, outcome)
            except BaseException:
                # Queued probes are dropped; only the ones already admitted finish.
                executor.shutdown(wait=False, cancel_futures=True)
                if self.logger:
                    pending = sum(1 for future in future_to_address if future.cancelled())
                    self.logger.debug(f"Dispatch aborted, {pending} queued probes cancelled")
                raise

        return outcomes

    def _admitted(self, probe: Callable[[str], HostOutcome], address: str) -> HostOutcome:
        with self._gate:
            return probe(address)

    def _degraded_outcome(self, address: str, error: Exception) -> HostOutcome:
        # HostProbe contains its own failures; this only guards foreign probe callables.
        if self.logger:
            self.logger.error(f"Probe for {address} raised unexpectedly", exception=error)
        return HostOutcome(
            address=address,
            display_name=NOT_APPLICABLE,
            link_address=NOT_APPLICABLE,
            reachable=False,
            probe_results={"reachability": ProbeResult.failed(str(error) or type(error).__name__)},
        )
