"""Shared pytest fixtures for the IP inventory manager.

Provides sample records, pre-populated stores, deterministic fake
liveness probes, and capturing ``rich`` consoles used across the test
suite.
"""

from __future__ import annotations

import io
from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from ipmanager.inventory.record import Record
from ipmanager.inventory.store import RecordStore

# ---------------------------------------------------------------------------
# Record fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def core_switch() -> Record:
    """Record for the core switch."""
    return Record(
        id=1,
        ip="10.0.0.1",
        subnet="10.0.0.0/24",
        gateway="10.0.0.254",
        description="core switch",
        port=22,
    )


@pytest.fixture
def edge_router() -> Record:
    """Record for the WAN edge router."""
    return Record(
        id=2,
        ip="192.168.1.1",
        subnet="192.168.1.0/24",
        gateway="192.168.1.254",
        description="edge router",
        port=443,
    )


@pytest.fixture
def sample_records(core_switch: Record, edge_router: Record) -> list[Record]:
    """Two records in insertion order."""
    return [core_switch, edge_router]


@pytest.fixture
def store(sample_records: list[Record]) -> RecordStore:
    """A store holding the two sample records."""
    return RecordStore(sample_records)


@pytest.fixture
def database(tmp_path: Path) -> Path:
    """Path of a database file inside a temporary directory."""
    return tmp_path / "ip_database.json"


# ---------------------------------------------------------------------------
# Probe fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def online_ips() -> set[str]:
    """Addresses the fake probe reports as reachable."""
    return {"10.0.0.1"}


@pytest.fixture
def fake_probe(online_ips: set[str]) -> Callable[[str, int], bool]:
    """Probe that never touches the network."""

    def probe(ip: str, port: int) -> bool:
        return ip in online_ips

    return probe


# ---------------------------------------------------------------------------
# Console fixtures
# ---------------------------------------------------------------------------


def make_console() -> Console:
    """Console writing plain text into an in-memory buffer."""
    return Console(file=io.StringIO(), width=200, color_system=None, force_terminal=False)


@pytest.fixture
def console() -> Console:
    """Capturing console for standard output."""
    return make_console()


@pytest.fixture
def err_console() -> Console:
    """Capturing console for error output."""
    return make_console()


# ---------------------------------------------------------------------------
# Pytest configuration
# ---------------------------------------------------------------------------


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
