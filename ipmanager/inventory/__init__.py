"""Record model, in-memory store, and JSON persistence.

Provides the session-owned ``RecordStore`` and the functions that move
the full record set to and from the database file.
"""

from .persistence import load, save
from .record import Record
from .store import IdPolicy, RecordStore

__all__ = ["IdPolicy", "Record", "RecordStore", "load", "save"]
