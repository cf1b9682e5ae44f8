"""Expected neighbor view ("show interfaces neighbor expected").

One record per local interface listed in CONFIG_DB DEVICE_NEIGHBOR,
enriched with the neighbor device's DEVICE_NEIGHBOR_METADATA row:

    {"Ethernet2": {"neighbor": "DEVICE01T1", "neighbor_port": "Ethernet1",
                   "neighbor_loopback": "10.1.1.1", "neighbor_mgmt": "192.0.2.10",
                   "neighbor_type": "BackEndLeafRouter"}}

Anything missing is reported as the string "None".
"""

import logging

from netview.derived_views.fields import get_field
from netview.derived_views.render import render_view, serialize_view
from netview.schemas.show import NeighborExpectedRecord
from netview.services.naming import NamingMode
from netview.services.table_fetcher import TableFetcher, TableSnapshot, fetch_snapshots

logger = logging.getLogger("netview.views")

NONE = "None"

DEVICE_NEIGHBOR = ("CONFIG_DB", "DEVICE_NEIGHBOR")
DEVICE_NEIGHBOR_METADATA = ("CONFIG_DB", "DEVICE_NEIGHBOR_METADATA")

TABLES = (DEVICE_NEIGHBOR, DEVICE_NEIGHBOR_METADATA)


def strip_prefix_length(address: str) -> str:
    """`10.1.1.1/32` -> `10.1.1.1`."""
    return address.split("/", 1)[0]


def derive_neighbor(
    neighbors: TableSnapshot,
    metadata: TableSnapshot,
    interface: str,
) -> NeighborExpectedRecord:
    device = get_field(neighbors, interface, "name")
    loopback = get_field(metadata, device, "lo_addr") if device else ""
    mgmt = get_field(metadata, device, "mgmt_addr") if device else ""
    return NeighborExpectedRecord(
        neighbor=device or NONE,
        neighbor_port=get_field(neighbors, interface, "port", NONE) or NONE,
        neighbor_loopback=strip_prefix_length(loopback) if loopback else NONE,
        neighbor_mgmt=strip_prefix_length(mgmt) if mgmt else NONE,
        neighbor_type=(get_field(metadata, device, "type") if device else "") or NONE,
    )


def build_neighbor_records(
    neighbors: TableSnapshot,
    metadata: TableSnapshot,
) -> dict[str, NeighborExpectedRecord]:
    return {
        interface: derive_neighbor(neighbors, metadata, interface)
        for interface in neighbors
    }


async def interface_neighbor_expected_view(
    fetcher: TableFetcher,
    *,
    naming_mode: NamingMode = NamingMode.default,
    concurrently: bool = False,
) -> bytes:
    # Keys are raw interface names in either naming mode.
    snapshots = await fetch_snapshots(fetcher, TABLES, concurrently=concurrently)
    records = build_neighbor_records(
        snapshots[DEVICE_NEIGHBOR], snapshots[DEVICE_NEIGHBOR_METADATA]
    )
    logger.debug("neighbor expected view: %d interfaces", len(records))
    return serialize_view(render_view(records))
