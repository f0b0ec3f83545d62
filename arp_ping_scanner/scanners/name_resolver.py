"""Reverse name lookup backed by the system resolver."""

import socket

from .base_scanner import NameResolver
from ..core.data_models import ProbeResult


class SocketNameResolver(NameResolver):
    """Resolves names with ``socket.gethostbyaddr``."""

    def resolve(self, address: str) -> ProbeResult:
        try:
            hostname, _aliases, _addresses = socket.gethostbyaddr(address)
        except socket.herror as e:
            return ProbeResult.not_found(f"no PTR record: {e}")
        except (socket.gaierror, socket.timeout, OSError) as e:
            return ProbeResult.failed(f"reverse lookup failed: {e}")

        if not hostname:
            return ProbeResult.not_found("empty host name")
        self._log_debug(f"Resolved {address} -> {hostname}")
        return ProbeResult.success(hostname)
