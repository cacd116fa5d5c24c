"""JSON persistence for the record store.

The whole record set is written on every save as a pretty-printed JSON
array.  Saves go through a temporary file in the target directory
followed by ``os.replace`` so a failed write never leaves a truncated
database behind.

Usage::

    records = load(Path("ip_database.json"))
    save(Path("ip_database.json"), records)
"""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from collections.abc import Iterable
from pathlib import Path

from ..core.exceptions import ParseError, StorageError
from .record import Record

logger = logging.getLogger(__name__)

DEFAULT_DATABASE = Path("ip_database.json")


def dumps(records: Iterable[Record]) -> str:
    """Serialize records to the persisted JSON layout."""
    return json.dumps([r.to_dict() for r in records], indent=2)


def loads(text: str) -> list[Record]:
    """Parse the persisted JSON layout into records.

    Entries without an ``id`` are numbered by their 1-based position.

    Raises:
        ParseError: If *text* is not JSON or does not match the record
            layout, or if two records share an id.

    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(
            "Database content is not valid JSON",
            details={"error": str(exc)},
        ) from exc

    if not isinstance(raw, list):
        raise ParseError(
            "Database content must be a JSON array of records",
            details={"type": type(raw).__name__},
        )

    records: list[Record] = []
    seen: set[int] = set()
    for position, entry in enumerate(raw, start=1):
        record = Record.from_dict(entry, default_id=position)
        if record.id in seen:
            raise ParseError("Duplicate record id", details={"id": record.id})
        seen.add(record.id)
        records.append(record)
    return records


def save(path: Path, records: Iterable[Record]) -> None:
    """Write the full record set to *path*, replacing its contents.

    Args:
        path: Database file location.
        records: Records in store order.

    Raises:
        StorageError: If the file cannot be created or written.

    """
    path = Path(path)
    records = list(records)
    payload = dumps(records)
    directory = path.parent
    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=directory,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as fh:
            tmp_name = fh.name
            fh.write(payload)
        if path.exists():
            shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise StorageError(
            f"Cannot write database file: {path}",
            details={"error": str(exc)},
        ) from exc
    logger.info("Saved %d records to %s", len(records), path)


def load(path: Path) -> list[Record]:
    """Read the record set stored at *path*.

    Args:
        path: Database file location.

    Returns:
        Records in stored order.

    Raises:
        StorageError: If the file does not exist or cannot be read.
        ParseError: If the content is malformed.

    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise StorageError(
            f"Cannot read database file: {path}",
            details={"error": str(exc)},
        ) from exc
    except UnicodeDecodeError as exc:
        raise ParseError(
            f"Database file is not UTF-8 text: {path}",
            details={"error": str(exc)},
        ) from exc

    records = loads(text)
    logger.info("Loaded %d records from %s", len(records), path)
    return records
