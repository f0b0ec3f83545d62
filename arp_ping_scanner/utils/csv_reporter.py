"""CSV export of scan results: one ``ip,hostname,mac,reachable`` row per host."""

import csv
from pathlib import Path
from typing import Iterable, Optional, Union

from ..core.data_models import HostOutcome
from .logger import Logger, get_logger


class CSVReporter:
    """Writes host outcomes to a header-less CSV file, in the order given."""

    def __init__(self, logger: Optional[Logger] = None):
        self.logger = logger or get_logger(__name__)

    @staticmethod
    def to_row(outcome: HostOutcome) -> list:
        return [
            outcome.address,
            outcome.display_name,
            outcome.link_address,
            str(outcome.reachable),
        ]

    def write(self, outcomes: Iterable[HostOutcome], filepath: Union[str, Path]) -> str:
        """
        Write outcomes to ``filepath``.

        Returns:
            str: Path of the written file

        Raises:
            OSError: If the file cannot be written
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        rows = 0
        with open(filepath, 'w', encoding='utf-8', newline='') as f:
            writer = csv.writer(f, lineterminator='\n')
            for outcome in outcomes:
                writer.writerow(self.to_row(outcome))
                rows += 1

        self.logger.debug(f"Wrote {rows} rows to {filepath}")
        return str(filepath)
