"""Fixed-width console table of host outcomes."""

from typing import Iterable, Optional

from ..core.data_models import HostOutcome
from .logger import Logger, logger as default_logger

COLUMN_WIDTHS = [15, 30, 20]  # status column is left unpadded


class ConsoleReporter:
    """Prints one ``IP  host name  MAC  Reachable`` row per outcome."""

    def __init__(self, logger: Optional[Logger] = None, show_header: bool = False):
        self.logger = logger or default_logger
        self.show_header = show_header

    @staticmethod
    def to_values(outcome: HostOutcome) -> list:
        return [
            outcome.address,
            outcome.display_name,
            outcome.link_address,
            "Reachable" if outcome.reachable else "Unreachable",
        ]

    def report(self, outcomes: Iterable[HostOutcome]) -> int:
        """Print the rows and return how many were printed."""
        if self.show_header:
            self.logger.table_header(["IP", "Host Name", "MAC Address", "Status"], COLUMN_WIDTHS)

        count = 0
        for outcome in outcomes:
            self.logger.table_row(self.to_values(outcome), COLUMN_WIDTHS)
            count += 1
        return count
