"""Core module providing validation, liveness probing, and the exception hierarchy.

This module contains the leaf components of the inventory manager: the
IPv4/CIDR validators, the bounded-timeout liveness checker, and the custom
exceptions raised throughout the package.
"""

from .exceptions import (
    ConfigError,
    IpManagerError,
    NotFoundError,
    ParseError,
    StorageError,
    ValidationError,
)

__all__ = [
    "ConfigError",
    "IpManagerError",
    "NotFoundError",
    "ParseError",
    "StorageError",
    "ValidationError",
]
