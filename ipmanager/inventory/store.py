"""In-memory record store and its add/edit/delete operations.

The ``RecordStore`` is the single source of truth for a session.  It is
created by the shell, passed by reference to every operation, and
written back in full on exit.  Every mutating operation validates first
and raises on failure, so a rejected add, edit, or delete leaves the
store exactly as it was.

Records are addressed either by integer id or by IP address (first
match in store order).

Usage::

    store = RecordStore(persistence.load(path))
    record = store.add("10.0.0.1", "10.0.0.0/24", "10.0.0.254", "core switch", "22")
    store.edit(record.id, description="core switch (rack 2)")
    store.delete("10.0.0.1")
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import replace
from enum import StrEnum

from ..core.exceptions import NotFoundError, ValidationError
from ..core.validator import ensure_valid, parse_port
from .record import DEFAULT_PORT, Record

logger = logging.getLogger(__name__)


class IdPolicy(StrEnum):
    """How the next record id is chosen.

    ``NEXT_MAX`` uses one more than the largest id in the store.
    ``LENGTH`` uses ``len(store) + 1``, advancing past ids that are
    already taken after deletions.
    """

    NEXT_MAX = "next_max"
    LENGTH = "length"


RecordKey = int | str


class RecordStore:
    """Ordered, insertion-order collection of ``Record`` objects.

    Args:
        records: Initial records, typically loaded from disk.
        id_policy: Strategy for assigning ids to new records.

    """

    def __init__(
        self,
        records: Iterable[Record] = (),
        id_policy: IdPolicy = IdPolicy.NEXT_MAX,
    ) -> None:
        """Initialize the store with existing records."""
        self._records: list[Record] = list(records)
        self._id_policy = IdPolicy(id_policy)
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(list(self._records))

    @property
    def records(self) -> list[Record]:
        """Return a copy of the records in store order."""
        return list(self._records)

    @property
    def id_policy(self) -> IdPolicy:
        """Return the id assignment strategy."""
        return self._id_policy

    def next_id(self) -> int:
        """Return the id the next added record will receive."""
        taken = {r.id for r in self._records}
        if self._id_policy is IdPolicy.LENGTH:
            candidate = len(self._records) + 1
            while candidate in taken:
                candidate += 1
            return candidate
        return max(taken, default=0) + 1

    # -- Lookup ---------------------------------------------------------------

    def _index_of(self, key: RecordKey) -> int:
        """Return the list position of the record addressed by *key*.

        Raises:
            NotFoundError: If no record matches.

        """
        if isinstance(key, int) and not isinstance(key, bool):
            for index, record in enumerate(self._records):
                if record.id == key:
                    return index
            raise NotFoundError(
                f"Record id {key} out of range",
                details={"ids": [r.id for r in self._records]},
            )

        for index, record in enumerate(self._records):
            if record.ip == key:
                return index
        raise NotFoundError(f"IP address {key} not found in the database")

    def find(self, key: RecordKey) -> Record:
        """Return the record addressed by id or IP address.

        Raises:
            NotFoundError: If no record matches.

        """
        return self._records[self._index_of(key)]

    # -- Mutations ------------------------------------------------------------

    def add(
        self,
        ip: str,
        subnet: str,
        gateway: str,
        description: str = "",
        port: str = "",
    ) -> Record:
        """Validate and append a new record.

        Args:
            ip: IPv4 host address.
            subnet: CIDR subnet.
            gateway: IPv4 gateway address.
            description: Free-form text.
            port: Probe port as entered; empty selects the default.

        Returns:
            The appended ``Record``.

        Raises:
            ValidationError: If any field is malformed.  Nothing is added.

        """
        fields = {"ip": ip, "subnet": subnet, "gateway": gateway}
        if port:
            fields["port"] = port
        ensure_valid(**fields)

        record = Record(
            id=self.next_id(),
            ip=ip,
            subnet=subnet,
            gateway=gateway,
            description=description,
            port=parse_port(port) if port else DEFAULT_PORT,
        )
        self._records.append(record)
        self._logger.info("Added record %d (%s)", record.id, record.ip)
        return record

    def delete(self, key: RecordKey) -> Record:
        """Remove the record addressed by id or IP address.

        Returns:
            The removed ``Record``.

        Raises:
            NotFoundError: If no record matches.  Nothing is removed.

        """
        record = self._records.pop(self._index_of(key))
        self._logger.info("Deleted record %d (%s)", record.id, record.ip)
        return record

    def edit(
        self,
        key: RecordKey,
        ip: str | None = None,
        subnet: str | None = None,
        gateway: str | None = None,
        description: str | None = None,
        port: str | None = None,
    ) -> Record:
        """Replace fields of an existing record.

        ``None`` or an empty string keeps the current value.  The
        candidate record is validated as a whole before anything is
        committed.

        Returns:
            The updated ``Record``.

        Raises:
            NotFoundError: If no record matches.
            ValidationError: If any resulting field is malformed.  The
                original record is left fully intact.

        """
        index = self._index_of(key)
        current = self._records[index]

        changes: dict[str, str] = {
            name: value
            for name, value in (
                ("ip", ip),
                ("subnet", subnet),
                ("gateway", gateway),
                ("description", description),
            )
            if value
        }
        ensure_valid(
            **({"ip": ip} if ip else {}),
            subnet=changes.get("subnet", current.subnet),
            gateway=changes.get("gateway", current.gateway),
            **({"port": port} if port else {}),
        )

        updated = replace(current, **changes)
        if port:
            updated.port = parse_port(port)
        self._records[index] = updated
        self._logger.info("Updated record %d (%s)", updated.id, updated.ip)
        return updated


def parse_key(text: str) -> RecordKey:
    """Interpret user input as a record id or an IP address.

    A purely numeric string is an id; anything else is matched against
    record IP addresses.

    Raises:
        ValidationError: If *text* is empty.

    """
    text = text.strip()
    if not text:
        raise ValidationError("Record id or IP address is required")
    if all("0" <= ch <= "9" for ch in text):
        return int(text)
    return text
