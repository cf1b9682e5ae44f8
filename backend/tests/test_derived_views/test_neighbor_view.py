"""Expected neighbor view tests."""

import json

import pytest

from netview.core.errors import StoreUnavailable
from netview.derived_views.neighbor import (
    build_neighbor_records,
    interface_neighbor_expected_view,
    strip_prefix_length,
)
from netview.services.table_fetcher import InMemoryTableFetcher


def test_strip_prefix_length():
    assert strip_prefix_length("10.1.1.1/32") == "10.1.1.1"
    assert strip_prefix_length("fc00::1/128") == "fc00::1"
    assert strip_prefix_length("192.0.2.10") == "192.0.2.10"


def test_missing_metadata_defaults_to_none():
    records = build_neighbor_records(
        {"Ethernet4": {"name": "DEVICE02T1", "port": "Ethernet9"}},
        {},
    )
    assert records["Ethernet4"].model_dump() == {
        "neighbor": "DEVICE02T1",
        "neighbor_port": "Ethernet9",
        "neighbor_loopback": "None",
        "neighbor_mgmt": "None",
        "neighbor_type": "None",
    }


def test_partial_metadata():
    records = build_neighbor_records(
        {"Ethernet4": {"name": "DEVICE02T1", "port": "Ethernet9"}},
        {"DEVICE02T1": {"type": "LeafRouter"}},
    )
    record = records["Ethernet4"]
    assert record.neighbor_type == "LeafRouter"
    assert record.neighbor_loopback == "None"


def test_neighbor_row_without_name():
    records = build_neighbor_records({"Ethernet4": {"port": "Ethernet9"}}, {})
    assert records["Ethernet4"].neighbor == "None"
    assert records["Ethernet4"].neighbor_port == "Ethernet9"


@pytest.mark.asyncio
async def test_view_no_data(fetcher: InMemoryTableFetcher):
    assert await interface_neighbor_expected_view(fetcher) == b"{}"


@pytest.mark.asyncio
async def test_view_single_neighbor(neighbor_fetcher: InMemoryTableFetcher):
    payload = await interface_neighbor_expected_view(neighbor_fetcher)
    assert payload == (
        b'{"Ethernet2":{"neighbor":"DEVICE01T1","neighbor_port":"Ethernet1",'
        b'"neighbor_loopback":"10.1.1.1","neighbor_mgmt":"192.0.2.10",'
        b'"neighbor_type":"BackEndLeafRouter"}}'
    )


@pytest.mark.asyncio
async def test_view_orders_interfaces_naturally(fetcher: InMemoryTableFetcher):
    fetcher.load("CONFIG_DB", "DEVICE_NEIGHBOR", {
        "Ethernet12": {"name": "T1-C", "port": "Ethernet1"},
        "Ethernet4": {"name": "T1-B", "port": "Ethernet1"},
        "Ethernet0": {"name": "T1-A", "port": "Ethernet1"},
    })
    payload = await interface_neighbor_expected_view(fetcher)
    assert list(json.loads(payload)) == ["Ethernet0", "Ethernet4", "Ethernet12"]


@pytest.mark.asyncio
async def test_view_fetch_failure(neighbor_fetcher: InMemoryTableFetcher):
    neighbor_fetcher.fail("CONFIG_DB", "DEVICE_NEIGHBOR_METADATA")
    with pytest.raises(StoreUnavailable):
        await interface_neighbor_expected_view(neighbor_fetcher)
