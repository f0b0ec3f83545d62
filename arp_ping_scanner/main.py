"""
Main entry point for the ARP Ping Scanner.

This module provides the command-line interface: argument parsing,
configuration loading, scan start/completion messages, console output and
CSV/JSON export, plus graceful shutdown handling.
"""

import argparse
import signal
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config.config_loader import ConfigLoader, ScanConfig
from .core.data_models import ScanResultSet
from .core.scanner_orchestrator import ScannerOrchestrator
from .utils.console_reporter import ConsoleReporter
from .utils.csv_reporter import CSVReporter
from .utils.error_handler import (
    ArpPingScannerError, ErrorContext, ErrorHandler, ErrorSeverity, ErrorType,
    InvalidRangeFormat, UnsupportedAddressFamily,
)
from .utils.json_reporter import JSONReporter
from .utils.logger import LogLevel, get_logger, set_log_level

DEFAULT_CIDR = "192.168.10.0/24"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_RANGE = 2
EXIT_INTERRUPTED = 130


class ArpPingScannerApp:
    """
    Main application class for the ARP Ping Scanner.

    Handles the CLI workflow and application lifecycle.
    """

    def __init__(self, install_signal_handlers: bool = True):
        self.logger = get_logger(__name__)
        self.error_handler = ErrorHandler(self.logger)
        self.shutdown_requested = False

        if install_signal_handlers:
            signal.signal(signal.SIGINT, self._signal_handler)
            signal.signal(signal.SIGTERM, self._signal_handler)

    def _signal_handler(self, signum: int, frame) -> None:
        """
        Handle shutdown signals.

        The first signal interrupts the scan via KeyboardInterrupt; a second
        one exits immediately.
        """
        if not self.shutdown_requested:
            self.shutdown_requested = True
            self.logger.warning(f"Received {signal.Signals(signum).name} - stopping scan...")
            raise KeyboardInterrupt
        self.logger.error("Force shutdown requested - terminating immediately")
        sys.exit(EXIT_FAILURE)

    def load_config(self, args: argparse.Namespace) -> ScanConfig:
        """Load the YAML configuration and apply command-line overrides."""
        loader = ConfigLoader(logger=self.logger)
        config = loader.load_scan_config(Path(args.config).resolve() if args.config else None)

        if args.concurrency is not None:
            config.concurrency_limit = args.concurrency
        if args.timeout is not None:
            config.ping_timeout = args.timeout
        if args.max_addresses is not None:
            config.max_addresses = args.max_addresses
        if args.method is not None:
            config.reachability_method = args.method
        return config

    def run(self, args: argparse.Namespace) -> int:
        """
        Run the scanner.

        Args:
            args: Parsed command line arguments

        Returns:
            int: Exit code
        """
        try:
            config = self.load_config(args)
            orchestrator = ScannerOrchestrator(config=config, logger=self.logger)
            orchestrator.validate(args.cidr)

            self.logger.banner(f"Start Scanning network [{args.cidr}]...")
            result_set = orchestrator.scan(args.cidr)
            self.logger.banner(
                f"Completed Scanning network [{args.cidr}]... "
                f"{result_set.duration * 1000:,.0f}[ms]"
            )
            print()

            self.write_outputs(result_set, args)
            return EXIT_OK

        except (InvalidRangeFormat, UnsupportedAddressFamily) as e:
            self.error_handler.handle_scanner_error(e, "scan")
            return EXIT_INVALID_RANGE
        except ArpPingScannerError as e:
            self.error_handler.handle_scanner_error(e, "scan")
            return EXIT_FAILURE
        except OSError as e:
            context = ErrorContext(
                error_type=ErrorType.FILE_ERROR,
                severity=ErrorSeverity.HIGH,
                operation="write_outputs",
                component="ArpPingScannerApp",
            )
            self.error_handler.handle_error(e, context)
            return EXIT_FAILURE
        except KeyboardInterrupt:
            self.logger.warning("Scan interrupted by user")
            return EXIT_INTERRUPTED

    def write_outputs(self, result_set: ScanResultSet, args: argparse.Namespace) -> None:
        outcomes = result_set if args.all else result_set.reachable()

        ConsoleReporter(self.logger).report(outcomes)

        if args.output:
            path = CSVReporter(self.logger).write(outcomes, args.output)
            self.logger.success(f"Results written to CSV file: {path}")

        if args.json_output:
            JSONReporter(Path(args.json_output).parent, self.logger).generate_report(
                result_set, args.json_output, reachable_only=not args.all
            )


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command line argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="arp-ping-scanner",
        description="Scan a CIDR range and report reachable hosts with their host name and MAC address.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  arp-ping-scanner                                  # Scan 192.168.10.0/24
  arp-ping-scanner 10.0.0.0/24 -o hosts.csv         # Also write reachable hosts to CSV
  arp-ping-scanner 10.0.0.0/22 -c 200 --all         # 200 probes in flight, list every address
  arp-ping-scanner 10.0.0.0/16 --max-addresses 4096 # Refuse ranges above 4096 addresses
        """
    )

    parser.add_argument(
        "cidr",
        nargs="?",
        default=DEFAULT_CIDR,
        help=f"CIDR range to scan (default: {DEFAULT_CIDR})"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        help="Write results to this CSV file"
    )

    parser.add_argument(
        "--json-output",
        type=str,
        help="Write a JSON report to this file"
    )

    parser.add_argument(
        "--concurrency", "-c",
        type=int,
        help="Maximum number of hosts probed at once (default: 100)"
    )

    parser.add_argument(
        "--timeout", "-t",
        type=float,
        help="Echo reply timeout in seconds (default: 1)"
    )

    parser.add_argument(
        "--method",
        choices=["ping", "scapy"],
        help="Reachability backend: system ping or scapy ICMP (needs root)"
    )

    parser.add_argument(
        "--max-addresses",
        type=int,
        help="Refuse to scan ranges with more addresses than this"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="YAML configuration file (default: arp_ping_scanner/config/scan_config.yml)"
    )

    parser.add_argument(
        "--all",
        action="store_true",
        help="Include unreachable hosts in the output"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging output"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"ARP Ping Scanner {__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the ARP Ping Scanner.

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(LogLevel.DEBUG)

    app = ArpPingScannerApp()
    return app.run(args)


if __name__ == "__main__":
    sys.exit(main())
