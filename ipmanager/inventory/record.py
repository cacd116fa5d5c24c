"""Data model for a managed network device record."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from ..core.exceptions import ParseError

DEFAULT_PORT = 22

_STRING_FIELDS = ("ip", "subnet", "gateway", "description")


@dataclass
class Record:
    """One managed network device entry.

    Attributes:
        id: Positive integer identity, unique within the store.
        ip: IPv4 host address of the device.
        subnet: CIDR network the device lives in.
        gateway: IPv4 default gateway.
        description: Free-form text.
        port: TCP port used for liveness probes.

    """

    id: int
    ip: str
    subnet: str
    gateway: str
    description: str = ""
    port: int = DEFAULT_PORT

    def to_dict(self) -> dict[str, Any]:
        """Return the record as a JSON-serializable mapping."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Any, default_id: int | None = None) -> Record:
        """Build a record from a persisted JSON object.

        Args:
            data: Decoded JSON object.
            default_id: Id to use when the object carries none, as in
                files written before records had ids.

        Raises:
            ParseError: If the object does not have the expected shape.

        """
        if not isinstance(data, dict):
            raise ParseError(
                "Record entry is not an object",
                details={"type": type(data).__name__},
            )
        for name in _STRING_FIELDS:
            if not isinstance(data.get(name), str):
                raise ParseError(
                    f"Record field '{name}' missing or not a string",
                    details={"entry": data},
                )

        record_id = data.get("id", default_id)
        port = data.get("port", DEFAULT_PORT)
        # bool is an int subclass; reject it explicitly
        if not isinstance(record_id, int) or isinstance(record_id, bool) or record_id < 1:
            raise ParseError("Record id must be a positive integer", details={"id": record_id})
        if not isinstance(port, int) or isinstance(port, bool) or not 0 <= port <= 65535:
            raise ParseError("Record port must be an integer 0-65535", details={"port": port})

        return cls(
            id=record_id,
            ip=data["ip"],
            subnet=data["subnet"],
            gateway=data["gateway"],
            description=data["description"],
            port=port,
        )
