"""Interactive menu shell for the IP inventory manager.

The shell owns the ``RecordStore`` for the session.  It reads a numeric
menu choice, runs the matching operation, reports any failure, and goes
back to the menu.  Choosing *Exit* writes the store to disk; that is
the only point at which anything is saved.

Usage::

    store = load_store(Path("ip_database.json"))
    shell = InteractiveShell(store, Path("ip_database.json"))
    status = shell.run()
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import IntEnum
from pathlib import Path

from rich.console import Console

from .config import DEFAULT_CONFIG_FILE, Settings, load_settings
from .core.exceptions import ConfigError, IpManagerError, ParseError, StorageError
from .core.liveness import LivenessChecker, Probe
from .inventory import persistence
from .inventory.store import IdPolicy, RecordStore, parse_key
from .reporting.table import display as display_records

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]

MENU = """==== IP Management Menu ====
1. Display IP information
2. Add IP information
3. Delete IP information
4. Edit IP information
5. Exit"""


class MenuChoice(IntEnum):
    """Numeric menu entries."""

    DISPLAY = 1
    ADD = 2
    DELETE = 3
    EDIT = 4
    EXIT = 5


def load_store(
    path: Path,
    id_policy: IdPolicy = IdPolicy.NEXT_MAX,
    err_console: Console | None = None,
) -> RecordStore:
    """Build the session store from the database file.

    A missing file starts an empty store silently.  An unreadable or
    malformed file is reported on the error console and also starts an
    empty store.
    """
    path = Path(path)
    if not path.exists():
        logger.info("Database %s does not exist yet, starting empty", path)
        return RecordStore(id_policy=id_policy)
    try:
        return RecordStore(persistence.load(path), id_policy=id_policy)
    except (StorageError, ParseError) as exc:
        logger.error("Error loading database: %s", exc)
        (err_console or Console(stderr=True)).print(
            f"Error loading database: {exc}", style="red", markup=False, highlight=False
        )
        return RecordStore(id_policy=id_policy)


class InteractiveShell:
    """Menu loop dispatching to store operations.

    Args:
        store: The session's record store, mutated in place.
        database: Path the store is saved to on exit.
        probe: Liveness probe used when displaying records.
        input_fn: Reads one line of user input given a prompt; defaults
            to the builtin ``input``.
        console: Console for menus and tables.
        err_console: Console for error reports.

    """

    def __init__(
        self,
        store: RecordStore,
        database: Path,
        probe: Probe | None = None,
        input_fn: InputFn | None = None,
        console: Console | None = None,
        err_console: Console | None = None,
    ) -> None:
        """Initialize the shell around an existing store."""
        self._store = store
        self._database = Path(database)
        self._probe = probe if probe is not None else LivenessChecker()
        self._input = input_fn or input
        self._console = console or Console()
        self._err_console = err_console or Console(stderr=True)
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._handlers: dict[MenuChoice, Callable[[], None]] = {
            MenuChoice.DISPLAY: self.display,
            MenuChoice.ADD: self.add,
            MenuChoice.DELETE: self.delete,
            MenuChoice.EDIT: self.edit,
        }

    @property
    def store(self) -> RecordStore:
        """Return the session's record store."""
        return self._store

    # -- Loop -----------------------------------------------------------------

    def run(self) -> int:
        """Run the menu loop until the user chooses *Exit*.

        Returns:
            ``0`` if the store was saved on exit, ``1`` if saving failed.

        Raises:
            EOFError: If standard input is closed.

        """
        while True:
            self._console.print(MENU, markup=False, highlight=False)
            choice = self.read_choice()
            if choice is MenuChoice.EXIT:
                return self.exit()
            if choice is not None:
                self._run_operation(self._handlers[choice])
            self._console.print()

    def read_choice(self) -> MenuChoice | None:
        """Prompt for a menu choice, reporting invalid input.

        Returns:
            The selected ``MenuChoice`` or ``None`` if the input was not a
            valid choice.

        """
        text = self._prompt("Enter your choice:")
        try:
            number = int(text)
        except ValueError:
            self._report(ParseError(f"Menu choice '{text}' is not a number"))
            return None
        try:
            return MenuChoice(number)
        except ValueError:
            self._report_text("Invalid choice. Please try again.")
            return None

    def _run_operation(self, handler: Callable[[], None]) -> None:
        """Run one operation, reporting library errors without leaving the loop."""
        try:
            handler()
        except IpManagerError as exc:
            self._report(exc)

    # -- Operations -----------------------------------------------------------

    def display(self) -> None:
        """Show every record with its current liveness status."""
        display_records(self._store, probe=self._probe, console=self._console)

    def add(self) -> None:
        """Prompt for a new record and append it."""
        ip = self._prompt("Enter IP address:")
        subnet = self._prompt("Enter subnet (CIDR, e.g. 10.0.0.0/24):")
        gateway = self._prompt("Enter gateway:")
        description = self._prompt("Enter description:")
        port = self._prompt("Enter port [22]:")
        record = self._store.add(ip, subnet, gateway, description, port)
        self._say(f"IP information added successfully with id {record.id}!")

    def delete(self) -> None:
        """Prompt for a record id or IP address and remove that record."""
        key = parse_key(self._prompt("Enter record id or IP address to delete:"))
        record = self._store.delete(key)
        self._say(f"IP information for {record.ip} (id {record.id}) deleted successfully!")

    def edit(self) -> None:
        """Prompt for replacement values; empty input keeps a field."""
        key = parse_key(self._prompt("Enter record id or IP address to edit:"))
        current = self._store.find(key)
        updated = self._store.edit(
            current.id,
            ip=self._prompt(f"Enter new IP address [{current.ip}]:"),
            subnet=self._prompt(f"Enter new subnet [{current.subnet}]:"),
            gateway=self._prompt(f"Enter new gateway [{current.gateway}]:"),
            description=self._prompt(f"Enter new description [{current.description}]:"),
            port=self._prompt(f"Enter new port [{current.port}]:"),
        )
        self._say(f"IP information for id {updated.id} updated successfully!")

    def exit(self) -> int:
        """Save the store; a failure is reported but does not stop the exit."""
        try:
            persistence.save(self._database, self._store)
        except StorageError as exc:
            self._report_text(f"Error saving to database: {exc}")
            return 1
        self._say(f"Saved {len(self._store)} records to {self._database}.")
        return 0

    # -- I/O helpers ----------------------------------------------------------

    def _prompt(self, message: str) -> str:
        return self._input(f"{message} ").strip()

    def _say(self, message: str) -> None:
        self._console.print(message, markup=False, highlight=False)

    def _report(self, exc: IpManagerError) -> None:
        self._logger.warning("%s: %s", type(exc).__name__, exc)
        self._report_text(f"Error: {exc}")

    def _report_text(self, message: str) -> None:
        self._err_console.print(message, style="red", markup=False, highlight=False)


def main(config_file: Path = DEFAULT_CONFIG_FILE) -> int:
    """Entry point: load settings and the database, then run the shell.

    Returns:
        Process exit status.

    """
    err_console = Console(stderr=True)
    try:
        settings = load_settings(config_file)
    except ConfigError as exc:
        err_console.print(
            f"Error loading configuration: {exc}", style="red", markup=False, highlight=False
        )
        settings = Settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = load_store(settings.database, settings.id_policy, err_console=err_console)
    shell = InteractiveShell(
        store,
        settings.database,
        probe=LivenessChecker(timeout=settings.probe_timeout),
        err_console=err_console,
    )
    try:
        return shell.run()
    except (EOFError, KeyboardInterrupt):
        logger.error("Input stream closed, exiting without saving")
        err_console.print(
            "Input stream closed; exiting without saving.", style="red", markup=False, highlight=False
        )
        return 1
