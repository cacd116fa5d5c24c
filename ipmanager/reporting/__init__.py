"""Console rendering of the record store.

Uses ``rich`` tables with a live Online/Offline status column.
"""

from .table import display

__all__ = ["display"]
