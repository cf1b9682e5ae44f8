"""Shared test fixtures: in-memory tables, test client."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from netview.dependencies import get_fetcher
from netview.main import app
from netview.services import table_fetcher
from netview.services.table_fetcher import InMemoryTableFetcher

# CONFIG_DB order is deliberately not numeric.
PORTCHANNEL_TABLES = {
    ("CONFIG_DB", "PORTCHANNEL"): {
        "PortChannel103": {"admin_status": "up", "mtu": "9100"},
        "PortChannel101": {"admin_status": "up", "mtu": "9100"},
        "PortChannel102": {"admin_status": "up", "mtu": "9100"},
    },
    ("STATE_DB", "LAG_TABLE"): {
        "PortChannel101": {"runner.active": "true", "oper_status": "up"},
        "PortChannel102": {"runner.active": "true", "oper_status": "down"},
        "PortChannel103": {"runner.active": "false", "oper_status": "up"},
    },
    ("APPL_DB", "LAG_TABLE"): {
        "PortChannel101": {"admin_status": "up", "oper_status": "up", "mtu": "9100"},
        "PortChannel102": {"admin_status": "up", "oper_status": "down", "mtu": "9100"},
        "PortChannel103": {"admin_status": "up", "oper_status": "up", "mtu": "9100"},
    },
    ("STATE_DB", "LAG_MEMBER_TABLE"): {
        "PortChannel101|Ethernet0": {"runner.aggregator.selected": "true"},
        "PortChannel102|Ethernet0": {"runner.aggregator.selected": "false"},
        "PortChannel103|Ethernet8": {"runner.aggregator.selected": "false"},
        "PortChannel103|Ethernet0": {"runner.aggregator.selected": "true"},
    },
    ("APPL_DB", "LAG_MEMBER_TABLE"): {
        "PortChannel101:Ethernet0": {"status": "enabled"},
        "PortChannel102:Ethernet0": {"status": "disabled"},
        "PortChannel103:Ethernet0": {"status": "enabled"},
        "PortChannel103:Ethernet8": {"status": "disabled"},
    },
}

NEIGHBOR_TABLES = {
    ("CONFIG_DB", "DEVICE_NEIGHBOR"): {
        "Ethernet2": {"name": "DEVICE01T1", "port": "Ethernet1"},
    },
    ("CONFIG_DB", "DEVICE_NEIGHBOR_METADATA"): {
        "DEVICE01T1": {
            "lo_addr": "10.1.1.1/32",
            "mgmt_addr": "192.0.2.10/24",
            "type": "BackEndLeafRouter",
            "hwsku": "Arista-VM",
        },
    },
}


def _load(fetcher: InMemoryTableFetcher, tables: dict) -> None:
    for (db, table), rows in tables.items():
        fetcher.load(db, table, rows)


@pytest.fixture
def fetcher() -> InMemoryTableFetcher:
    """Empty in-memory store."""
    return InMemoryTableFetcher()


@pytest.fixture
def portchannel_fetcher(fetcher: InMemoryTableFetcher) -> InMemoryTableFetcher:
    """Three port channels: active/up, active/down, inactive/up."""
    _load(fetcher, PORTCHANNEL_TABLES)
    return fetcher


@pytest.fixture
def neighbor_fetcher(fetcher: InMemoryTableFetcher) -> InMemoryTableFetcher:
    """One interface with a fully described neighbor."""
    _load(fetcher, NEIGHBOR_TABLES)
    return fetcher


@pytest.fixture(autouse=True)
def reset_fetcher_singleton():
    yield
    table_fetcher.set_fetcher(None)


@pytest_asyncio.fixture
async def client(fetcher: InMemoryTableFetcher) -> AsyncClient:
    """Yield an httpx AsyncClient wired to the in-memory store."""
    app.dependency_overrides[get_fetcher] = lambda: fetcher
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
