"""Tabular rendering of the record store.

Each call probes every record through the supplied ``Probe`` at render
time, so the status column always reflects the network as it is now.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..core.liveness import LinkStatus, LivenessChecker, Probe
from ..inventory.record import Record

logger = logging.getLogger(__name__)

COLUMNS = ("ID", "IP", "Subnet", "Gateway", "Description", "Port", "Status")

_STATUS_STYLES = {
    LinkStatus.ONLINE: "bold green",
    LinkStatus.OFFLINE: "bold red",
}


def build_table(records: Iterable[Record], probe: Probe) -> Table:
    """Build a ``rich`` table for *records*, probing each one.

    Args:
        records: Records in display order.
        probe: Callable returning ``True`` when ``ip:port`` is reachable.

    Returns:
        The populated ``Table``.

    """
    table = Table(title="IP Information", header_style="bold green")
    for column in COLUMNS:
        table.add_column(column, justify="right" if column in ("ID", "Port") else "left")

    count = 0
    for record in records:
        status = LinkStatus.from_bool(probe(record.ip, record.port))
        # Text cells are never parsed as console markup
        table.add_row(
            *(
                Text(value)
                for value in (
                    str(record.id),
                    record.ip,
                    record.subnet,
                    record.gateway,
                    record.description,
                    str(record.port),
                )
            ),
            Text(status.value, style=_STATUS_STYLES[status]),
        )
        count += 1

    if count == 0:
        table.caption = "No records"
    logger.debug("Rendered %d records", count)
    return table


def display(
    records: Iterable[Record],
    probe: Probe | None = None,
    console: Console | None = None,
) -> None:
    """Print the record table.

    Args:
        records: Records in display order.
        probe: Liveness probe; defaults to a ``LivenessChecker`` with the
            standard timeout.
        console: Output console; defaults to standard output.

    """
    table = build_table(records, probe if probe is not None else LivenessChecker())
    (console or Console()).print(table)
