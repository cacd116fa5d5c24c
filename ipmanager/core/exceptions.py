"""Custom exception hierarchy for the IP inventory manager.

All errors raised by the library inherit from ``IpManagerError`` so the
interactive shell can report any failed operation through a single
handler while tests still catch the precise kind.

Exception tree::

    IpManagerError
    ├── ValidationError
    ├── NotFoundError
    ├── StorageError
    ├── ParseError
    └── ConfigError
"""

from __future__ import annotations


class IpManagerError(Exception):
    """Base exception for all inventory manager errors.

    Attributes:
        message: Human-readable error description.
        details: Optional mapping of additional contextual data.

    """

    def __init__(
        self,
        message: str,
        details: dict[str, object] | None = None,
    ) -> None:
        """Initialize with a message and optional details."""
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details."""
        parts: list[str] = [self.message]
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"({detail_str})")
        return " ".join(parts)


class ValidationError(IpManagerError):
    """Raised when a record field fails syntactic validation.

    Examples:
        - IP address with an octet above 255
        - Subnet prefix length above 32
        - Port that is not a 16-bit unsigned integer

    """


class NotFoundError(IpManagerError):
    """Raised when an edit or delete target does not exist.

    Examples:
        - Record id outside the current id set
        - No record carries the requested IP address

    """


class StorageError(IpManagerError):
    """Raised when the database file cannot be read or written.

    Examples:
        - Database file missing on load
        - Permission denied on save
        - Target directory does not exist

    """


class ParseError(IpManagerError):
    """Raised when persisted content or numeric input cannot be parsed.

    Examples:
        - Database file is not valid JSON
        - A record object is missing a required field
        - Menu choice is not a number

    """


class ConfigError(IpManagerError):
    """Raised when the configuration file is malformed.

    Examples:
        - YAML syntax error
        - Unknown configuration key
        - Non-positive probe timeout

    """
