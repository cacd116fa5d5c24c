"""Bounded-timeout TCP liveness probing.

A record is *online* when a TCP connection to ``ip:port`` can be
established within the probe timeout.  Every failure (timeout, refusal,
unreachable network, malformed address) is reported as *offline*; no
exception ever leaves this module.

Probes are synchronous.  Anything that renders statuses depends only on
the ``Probe`` callable type, so probing can later be cached or run in
parallel without changing callers.

Usage::

    checker = LivenessChecker(timeout=1.0)
    if checker.is_online("10.0.0.1", 22):
        ...
"""

from __future__ import annotations

import logging
import socket
from collections.abc import Callable
from enum import StrEnum

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT = 1.0

Probe = Callable[[str, int], bool]


class LinkStatus(StrEnum):
    """Binary liveness tag shown next to each record."""

    ONLINE = "Online"
    OFFLINE = "Offline"

    @classmethod
    def from_bool(cls, online: bool) -> LinkStatus:
        """Map a probe result to its status tag."""
        return cls.ONLINE if online else cls.OFFLINE


def is_online(ip: str, port: int, timeout: float = DEFAULT_PROBE_TIMEOUT) -> bool:
    """Attempt a TCP connection to ``ip:port``.

    Args:
        ip: Target IPv4 address.
        port: Target TCP port.
        timeout: Connection timeout in seconds.

    Returns:
        ``True`` if the connection was established, ``False`` otherwise.

    """
    try:
        with socket.create_connection((ip, port), timeout=timeout):
            return True
    except (OSError, ValueError, OverflowError, TypeError) as exc:
        logger.debug("Probe %s:%s failed: %s", ip, port, exc)
        return False


class LivenessChecker:
    """Probe records for reachability with a fixed timeout.

    Args:
        timeout: Connection timeout in seconds applied to every probe.

    """

    def __init__(self, timeout: float = DEFAULT_PROBE_TIMEOUT) -> None:
        """Initialize the checker with a probe timeout."""
        self._timeout = timeout
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def timeout(self) -> float:
        """Return the per-probe timeout in seconds."""
        return self._timeout

    def is_online(self, ip: str, port: int) -> bool:
        """Probe ``ip:port`` and return whether it accepted a connection."""
        online = is_online(ip, port, timeout=self._timeout)
        self._logger.debug("%s:%s is %s", ip, port, LinkStatus.from_bool(online))
        return online

    def __call__(self, ip: str, port: int) -> bool:
        """Allow the checker to be passed wherever a ``Probe`` is expected."""
        return self.is_online(ip, port)
