"""
Link-address lookups against the local ARP / neighbour cache.

The cache only holds entries for hosts this machine has recently exchanged
local-segment traffic with, so a reachable host can legitimately come back
as NOT_FOUND. The cache is never primed.

Backends:
    ArpCommandResolver: ``arp -a <ip>`` on Windows, ``arp -n <ip>`` elsewhere
    IpNeighResolver:    ``ip neigh show <ip>`` on Linux (iproute2)
"""

import platform
import re
import shutil
import subprocess
from typing import List, Optional

from .base_scanner import LinkAddressResolver
from ..core.data_models import ProbeResult
from ..utils.error_handler import ConfigurationError, ProbeError
from ..utils.logger import Logger

LINK_ADDRESS_METHODS = ("auto", "arp", "ip-neigh")


class CommandLinkAddressResolver(LinkAddressResolver):
    """Runs an external command and extracts the hardware-address token."""

    def __init__(
        self,
        logger: Optional[Logger] = None,
        command_timeout: float = 5.0,
        system: Optional[str] = None,
    ):
        super().__init__(logger)
        self.command_timeout = command_timeout
        self.system = (system or platform.system()).lower()

    def build_command(self, address: str) -> List[str]:
        raise NotImplementedError

    def extract_link_address(self, address: str, output: str) -> Optional[str]:
        raise NotImplementedError

    def lookup(self, address: str) -> ProbeResult:
        output = self._run(self.build_command(address))
        token = self.extract_link_address(address, output)
        if token:
            self._log_debug(f"Cache entry for {address}: {token}")
            return ProbeResult.success(token)
        return ProbeResult.not_found(f"no cache entry for {address}")

    def _run(self, cmd: List[str]) -> str:
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.command_timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise ProbeError(f"'{' '.join(cmd)}' timed out after {self.command_timeout}s") from e
        except OSError as e:
            raise ProbeError(str(e)) from e

        # Both arp and ip exit non-zero when there is simply no entry, so the
        # exit code alone does not mean the query failed.
        return result.stdout + result.stderr


class ArpCommandResolver(CommandLinkAddressResolver):
    """Queries the cache with the ``arp`` command."""

    def build_command(self, address: str) -> List[str]:
        if self.system == "windows":
            return ["arp", "-a", address]
        return ["arp", "-n", address]

    def extract_link_address(self, address: str, output: str) -> Optional[str]:
        ip = re.escape(address)
        patterns = [
            # Windows: "  192.168.1.1           00-11-22-33-44-55     dynamic"
            rf"\b{ip}\s+([0-9A-Fa-f]{{2}}(?:-[0-9A-Fa-f]{{2}}){{5}})\b",
            # net-tools: "192.168.1.1   ether   00:11:22:33:44:55   C   eth0"
            rf"^{ip}\s+\S+\s+([0-9A-Fa-f]{{1,2}}(?::[0-9A-Fa-f]{{1,2}}){{5}})\b",
            # BSD/macOS: "? (192.168.1.1) at 0:11:22:33:44:55 on en0"
            rf"\({ip}\)\s+at\s+([0-9A-Fa-f]{{1,2}}(?::[0-9A-Fa-f]{{1,2}}){{5}})\b",
        ]
        for pattern in patterns:
            match = re.search(pattern, output, re.MULTILINE)
            if match:
                return match.group(1)
        return None


class IpNeighResolver(CommandLinkAddressResolver):
    """Queries the Linux neighbour table with ``ip neigh``."""

    def build_command(self, address: str) -> List[str]:
        return ["ip", "neigh", "show", address]

    def extract_link_address(self, address: str, output: str) -> Optional[str]:
        # Format: "192.168.1.1 dev eth0 lladdr 00:11:22:33:44:55 REACHABLE"
        for line in output.splitlines():
            parts = line.split()
            if not parts or parts[0] != address or "lladdr" not in parts:
                continue
            mac_idx = parts.index("lladdr") + 1
            if mac_idx < len(parts):
                return parts[mac_idx]
        return None


def create_link_address_resolver(
    method: str = "auto",
    logger: Optional[Logger] = None,
    command_timeout: float = 5.0,
    system: Optional[str] = None,
) -> LinkAddressResolver:
    """
    Build the link-address backend for this platform.

    Args:
        method: "auto", "arp" or "ip-neigh"
        logger: Logger passed to the backend
        command_timeout: Seconds before the external command is abandoned
        system: Platform name override, defaults to platform.system()

    Raises:
        ConfigurationError: If the method is unknown
    """
    if method not in LINK_ADDRESS_METHODS:
        raise ConfigurationError(
            f"Unknown link address method {method!r}, expected one of {LINK_ADDRESS_METHODS}"
        )

    system = (system or platform.system()).lower()
    if method == "auto":
        if system == "linux" and shutil.which("ip"):
            method = "ip-neigh"
        else:
            method = "arp"

    if method == "ip-neigh":
        return IpNeighResolver(logger, command_timeout, system)
    return ArpCommandResolver(logger, command_timeout, system)
