"""Syntactic validators for IPv4 addresses, CIDR subnets, and ports.

The ``validate_*`` predicates never raise; they return ``True`` only for
input that matches the exact boundary rules below, independent of how
``ipaddress`` happens to treat edge cases:

* an address is exactly four decimal octets, each ``0``-``255``, with no
  sign, whitespace, or leading zero on multi-digit octets;
* a subnet is ``<address>/<prefix>`` with a decimal prefix ``0``-``32``
  (host bits may be set);
* a port is a decimal integer ``0``-``65535``.

Usage::

    if not validate_subnet("10.0.0.0/24"):
        ...
    results = validate_fields(ip="10.0.0.1", gateway="10.0.0.254")
    failures = [r for r in results if not r.passed]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .exceptions import ValidationError

logger = logging.getLogger(__name__)

MAX_PREFIX_LENGTH = 32
MAX_PORT = 65535
_OCTET_COUNT = 4


def _is_decimal(text: str, max_digits: int) -> bool:
    """Return ``True`` for a plain ASCII digit string without a leading zero."""
    if not text or len(text) > max_digits:
        return False
    if not all("0" <= ch <= "9" for ch in text):
        return False
    return text == "0" or not text.startswith("0")


def validate_ip(value: str) -> bool:
    """Return ``True`` if *value* is a dotted-quad IPv4 host address."""
    if not isinstance(value, str):
        return False
    octets = value.split(".")
    if len(octets) != _OCTET_COUNT:
        return False
    return all(_is_decimal(octet, 3) and int(octet) <= 255 for octet in octets)


def validate_subnet(value: str) -> bool:
    """Return ``True`` if *value* is ``IPv4/prefix`` with a prefix of 0-32."""
    if not isinstance(value, str):
        return False
    address, sep, prefix = value.partition("/")
    if not sep:
        return False
    if not _is_decimal(prefix, 2) or int(prefix) > MAX_PREFIX_LENGTH:
        return False
    return validate_ip(address)


def validate_gateway(value: str) -> bool:
    """Return ``True`` if *value* is a valid gateway address.

    A gateway follows the same rules as a host address.
    """
    return validate_ip(value)


def parse_port(value: str) -> int:
    """Parse a port number from user input.

    Args:
        value: Decimal port string.

    Returns:
        The port as an ``int`` in the range ``0``-``65535``.

    Raises:
        ValidationError: If *value* is not a 16-bit unsigned integer.

    """
    text = value.strip() if isinstance(value, str) else ""
    if not text or not all("0" <= ch <= "9" for ch in text) or int(text) > MAX_PORT:
        raise ValidationError(
            f"Invalid port '{value}'",
            details={"expected": f"0-{MAX_PORT}"},
        )
    return int(text)


def validate_port(value: str) -> bool:
    """Return ``True`` if *value* parses as a 16-bit unsigned integer."""
    try:
        parse_port(value)
    except ValidationError:
        return False
    return True


@dataclass
class ValidationResult:
    """Outcome of validating a single record field.

    Attributes:
        field: Name of the record field.
        value: The raw value that was checked.
        passed: Whether the value is syntactically valid.

    """

    field: str
    value: str
    passed: bool

    @property
    def message(self) -> str:
        """Human-readable description of the outcome."""
        if self.passed:
            return f"{self.field} '{self.value}' is valid"
        return f"invalid {self.field} '{self.value}'"


_CHECKS = {
    "ip": validate_ip,
    "subnet": validate_subnet,
    "gateway": validate_gateway,
    "port": validate_port,
}


def validate_fields(**fields: str) -> list[ValidationResult]:
    """Validate several record fields at once.

    Only fields with a syntactic rule (``ip``, ``subnet``, ``gateway``,
    ``port``) are checked; anything else, such as ``description``, is
    ignored.

    Args:
        **fields: Field name to raw string value.

    Returns:
        One ``ValidationResult`` per checked field, in argument order.

    """
    results: list[ValidationResult] = []
    for name, value in fields.items():
        check = _CHECKS.get(name)
        if check is None:
            continue
        result = ValidationResult(field=name, value=value, passed=check(value))
        if not result.passed:
            logger.debug("Validation failed: %s", result.message)
        results.append(result)
    return results


def ensure_valid(**fields: str) -> None:
    """Validate fields and raise if any of them is malformed.

    Raises:
        ValidationError: Naming every invalid field.

    """
    failures = [r for r in validate_fields(**fields) if not r.passed]
    if failures:
        raise ValidationError(
            "; ".join(r.message for r in failures),
            details={"fields": ",".join(r.field for r in failures)},
        )
