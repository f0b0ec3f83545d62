"""
Reachability backends: system ``ping`` and scapy ICMP echo.

``PingCommandProber`` shells out to the platform ping command and needs no
privileges. ``ScapyICMPProber`` crafts the echo request itself and requires
raw-socket privileges (root / Administrator).
"""

import math
import platform
import subprocess
from typing import Optional

from .base_scanner import ReachabilityProber
from ..core.data_models import ProbeResult
from ..utils.error_handler import ProbeError
from ..utils.logger import Logger


class PingCommandProber(ReachabilityProber):
    """
    Reachability via one ``ping`` packet.

    The reply is judged by analyzing ping's output, since some platforms
    exit with 0 on "destination host unreachable".
    """

    def __init__(self, logger: Optional[Logger] = None, system: Optional[str] = None):
        super().__init__(logger)
        self.system = (system or platform.system()).lower()

    def build_command(self, address: str, timeout: float) -> list:
        if self.system == "windows":
            # Windows ping: ping -n 1 -w <ms> IP
            return ["ping", "-n", "1", "-w", str(int(timeout * 1000)), address]
        if self.system == "darwin":
            # macOS -W is in milliseconds
            return ["ping", "-c", "1", "-W", str(int(timeout * 1000)), address]
        # Linux ping -W takes whole seconds
        return ["ping", "-c", "1", "-W", str(max(1, math.ceil(timeout))), address]

    def probe(self, address: str, timeout: float) -> ProbeResult:
        cmd = self.build_command(address, timeout)
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout + 2,
            )
        except subprocess.TimeoutExpired:
            return ProbeResult.failed("ping timed out")
        except OSError as e:
            raise ProbeError(f"cannot run ping: {e}") from e

        output = result.stdout + result.stderr
        if result.returncode == 0 and self.analyze_output(output, address):
            return ProbeResult.success(True)
        return ProbeResult.not_found(f"no echo reply (exit code {result.returncode})")

    def analyze_output(self, output: str, address: str) -> bool:
        """
        Decide from ping output whether the host really replied.

        Args:
            output: Raw ping command output
            address: Target IP address

        Returns:
            True if a reply from the target is present
        """
        if not output:
            return False

        output_lower = output.lower()

        failure_indicators = [
            "destination host unreachable",
            "destination net unreachable",
            "request timed out",
            "general failure",
            "transmit failed",
            "no route to host",
            "network is unreachable",
        ]
        if any(indicator in output_lower for indicator in failure_indicators):
            return False

        if self.system == "windows":
            if "received = 0" in output_lower:
                return False
            return f"reply from {address}" in output_lower and "ttl=" in output_lower

        if " 0 received" in output_lower or " 0 packets received" in output_lower:
            return False
        return "bytes from" in output_lower or "ttl=" in output_lower


class ScapyICMPProber(ReachabilityProber):
    """Reachability via a scapy-crafted ICMP echo request."""

    def probe(self, address: str, timeout: float) -> ProbeResult:
        from scapy.all import ICMP, IP, sr1

        try:
            reply = sr1(IP(dst=address) / ICMP(), timeout=timeout, verbose=False)
        except PermissionError as e:
            raise ProbeError(f"raw sockets need elevated privileges: {e}") from e
        except OSError as e:
            raise ProbeError(f"ICMP send failed: {e}") from e

        if reply is None:
            return ProbeResult.not_found("no echo reply")

        icmp = reply.getlayer(ICMP)
        # type 0 is echo-reply
        if icmp is not None and icmp.type == 0:
            return ProbeResult.success(True)
        return ProbeResult.not_found(
            f"unexpected ICMP type {icmp.type if icmp is not None else 'none'}"
        )


def create_reachability_prober(method: str, logger: Optional[Logger] = None) -> ReachabilityProber:
    """Build the reachability backend named by ``method`` ("ping" or "scapy")."""
    if method == "scapy":
        return ScapyICMPProber(logger)
    return PingCommandProber(logger)
