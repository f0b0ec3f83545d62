"""
JSON Report Generator for the ARP Ping Scanner.

This module writes a scan result set to a structured JSON report, including
timestamp-based file naming and collision handling when only an output
directory is given.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..core.data_models import ScanResultSet
from .logger import Logger, get_logger


class JSONReporter:
    """
    Handles generation of JSON reports from scan result sets.

    This class is responsible for:
    - Converting scan results to JSON format
    - Managing output file naming with timestamp-based collision handling
    """

    def __init__(self, output_directory: Union[str, Path] = "results", logger: Optional[Logger] = None):
        """
        Initialize the JSON reporter.

        Args:
            output_directory: Directory used when no explicit file path is given
            logger: Logger instance
        """
        self.output_directory = Path(output_directory)
        self.logger = logger or get_logger(__name__)

    def generate_report(
        self,
        result_set: ScanResultSet,
        filepath: Optional[Union[str, Path]] = None,
        reachable_only: bool = False,
    ) -> str:
        """
        Write a JSON report for a scan.

        Args:
            result_set: Scan result set to serialize
            filepath: Target file; a timestamped name in output_directory is
                used when omitted
            reachable_only: Only include hosts that answered

        Returns:
            str: Path to the generated JSON file

        Raises:
            OSError: If the file cannot be written
        """
        json_data = self.to_json_data(result_set, reachable_only)

        if filepath is None:
            timestamp = result_set.started_at or datetime.now()
            filepath = self._handle_file_collision(
                self.output_directory / self._generate_filename(timestamp)
            )
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(json_data, f, indent=2, ensure_ascii=False, default=str)
        except OSError as e:
            self.logger.error(f"Failed to write JSON report to {filepath}: {e}")
            raise

        self.logger.info(f"JSON report successfully generated: {filepath}")
        return str(filepath)

    def to_json_data(self, result_set: ScanResultSet, reachable_only: bool = False) -> Dict[str, Any]:
        """Convert a result set to a JSON-serializable dictionary."""
        block = result_set.address_block
        scan_metadata = {
            "timestamp": result_set.started_at.isoformat() if result_set.started_at else None,
            "scan_duration": result_set.duration,
            "network_scanned": block.cidr if block else None,
            "network_address": block.network_address if block else None,
            "broadcast_address": block.broadcast_address if block else None,
            "concurrency_limit": result_set.concurrency_limit,
            "total_addresses_scanned": len(result_set),
            "reachable_hosts": len(result_set.reachable()),
        }

        outcomes = result_set.reachable() if reachable_only else result_set
        return {
            "scan_metadata": scan_metadata,
            "hosts": [outcome.to_dict() for outcome in outcomes],
        }

    def _generate_filename(self, timestamp: datetime) -> str:
        # Format: arp_ping_scan_YYYYMMDD_HHMMSS.json
        return f"arp_ping_scan_{timestamp.strftime('%Y%m%d_%H%M%S')}.json"

    def _handle_file_collision(self, filepath: Path) -> Path:
        """
        Handle filename collisions by adding incremental suffix.

        Args:
            filepath: Original file path

        Returns:
            Path: Unique file path
        """
        if not filepath.exists():
            return filepath

        base_name = filepath.stem
        extension = filepath.suffix

        for counter in range(1, 1000):
            new_filepath = filepath.parent / f"{base_name}_{counter:03d}{extension}"
            if not new_filepath.exists():
                self.logger.info(f"File collision detected, using filename: {new_filepath.name}")
                return new_filepath

        raise OSError(f"Too many file collisions for {filepath}")
