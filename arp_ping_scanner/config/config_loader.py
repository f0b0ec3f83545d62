"""
Configuration loader for the ARP Ping Scanner.
Handles loading and validation of the YAML scan configuration with fallback to defaults.
"""

import yaml
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Optional, Union

from ..scanners.arp_cache import LINK_ADDRESS_METHODS
from ..utils.logger import Logger, get_logger

DEFAULT_CONFIG_FILE = "scan_config.yml"
REACHABILITY_METHODS = ("ping", "scapy")


@dataclass
class ScanConfig:
    """Configuration for a scan."""
    concurrency_limit: int = 100
    ping_timeout: float = 1.0
    reachability_method: str = "ping"  # ping, scapy
    link_address_method: str = "auto"  # auto, arp, ip-neigh
    command_timeout: float = 5.0
    max_addresses: Optional[int] = None  # None = no guard


class ConfigLoader:
    """
    Loads and validates the YAML scan configuration.
    Provides fallback to default configuration when the file is missing or broken.
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None, logger: Optional[Logger] = None):
        """
        Initialize ConfigLoader.

        Args:
            config_dir: Directory containing configuration files.
                       Defaults to the config directory relative to this file.
            logger: Logger for validation warnings
        """
        if config_dir is None:
            self.config_dir = Path(__file__).parent
        else:
            self.config_dir = Path(config_dir)

        self.logger = logger or get_logger(__name__)

    def resolve_path(self, config_file: Optional[Union[str, Path]] = None) -> Path:
        if config_file is None:
            return self.config_dir / DEFAULT_CONFIG_FILE
        path = Path(config_file)
        return path if path.is_absolute() or path.parent != Path(".") else self.config_dir / path

    def load_scan_config(self, config_file: Optional[Union[str, Path]] = None) -> ScanConfig:
        """
        Load the scan configuration from a YAML file.

        Args:
            config_file: File name (relative to config_dir) or path

        Returns:
            ScanConfig object with loaded or default configuration
        """
        config_path = self.resolve_path(config_file)

        if not config_path.exists():
            log = self.logger.debug if config_file is None else self.logger.warning
            log(f"Scan config file not found at {config_path}. Using default configuration.")
            return ScanConfig()

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            self.logger.error(f"Error parsing scan config file {config_path}: {e}")
            self.logger.warning("Using default scan configuration.")
            return ScanConfig()
        except OSError as e:
            self.logger.error(f"Cannot read scan config file {config_path}: {e}")
            self.logger.warning("Using default scan configuration.")
            return ScanConfig()

        if not isinstance(config_data, dict) or not isinstance(config_data.get('scan'), dict):
            self.logger.warning(f"Invalid scan config structure in {config_path}. Using default configuration.")
            return ScanConfig()

        return self.from_dict(config_data['scan'])

    def from_dict(self, scan_data: dict) -> ScanConfig:
        """Build a validated ScanConfig from the ``scan`` mapping."""
        defaults = ScanConfig()
        return ScanConfig(
            concurrency_limit=self._validate_positive_int(
                scan_data.get('concurrency_limit', defaults.concurrency_limit),
                'concurrency_limit', defaults.concurrency_limit),
            ping_timeout=self._validate_positive_float(
                scan_data.get('ping_timeout', defaults.ping_timeout),
                'ping_timeout', defaults.ping_timeout),
            reachability_method=self._validate_choice(
                scan_data.get('reachability_method', defaults.reachability_method),
                'reachability_method', REACHABILITY_METHODS, defaults.reachability_method),
            link_address_method=self._validate_choice(
                scan_data.get('link_address_method', defaults.link_address_method),
                'link_address_method', LINK_ADDRESS_METHODS, defaults.link_address_method),
            command_timeout=self._validate_positive_float(
                scan_data.get('command_timeout', defaults.command_timeout),
                'command_timeout', defaults.command_timeout),
            max_addresses=self._validate_optional_limit(scan_data.get('max_addresses')),
        )

    def _validate_positive_int(self, value: Any, field_name: str, default: int) -> int:
        """
        Validate that a value is a positive integer.

        Args:
            value: Value to validate
            field_name: Name of the field for error messages
            default: Default value to use if validation fails

        Returns:
            Validated integer value or default
        """
        if isinstance(value, bool):
            self.logger.warning(f"Invalid {field_name}: {value}. Must be an integer. Using default: {default}")
            return default
        try:
            int_value = int(value)
            if int_value <= 0:
                self.logger.warning(f"Invalid {field_name}: {value}. Must be positive. Using default: {default}")
                return default
            return int_value
        except (ValueError, TypeError):
            self.logger.warning(f"Invalid {field_name}: {value}. Must be an integer. Using default: {default}")
            return default

    def _validate_positive_float(self, value: Any, field_name: str, default: float) -> float:
        try:
            float_value = float(value)
            if float_value <= 0:
                self.logger.warning(f"Invalid {field_name}: {value}. Must be positive. Using default: {default}")
                return default
            return float_value
        except (ValueError, TypeError):
            self.logger.warning(f"Invalid {field_name}: {value}. Must be a number. Using default: {default}")
            return default

    def _validate_choice(self, value: Any, field_name: str, choices: tuple, default: str) -> str:
        if value not in choices:
            self.logger.warning(f"Invalid {field_name}: {value}. Must be one of {list(choices)}. Using default: {default}")
            return default
        return value

    def _validate_optional_limit(self, value: Any) -> Optional[int]:
        if value is None:
            return None
        return self._validate_positive_int(value, 'max_addresses', None)

    def create_default_config(self, config_file: Optional[Union[str, Path]] = None) -> Path:
        """
        Write the default configuration file if it does not exist.

        Returns:
            Path of the configuration file
        """
        config_path = self.resolve_path(config_file)
        if config_path.exists():
            return config_path

        default_config = {'scan': asdict(ScanConfig())}

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(default_config, f, default_flow_style=False, indent=2)
        self.logger.info(f"Created default scan config at {config_path}")
        return config_path
