"""Show service: resolves a view path to its producer and runs it.

Each producer fetches its own snapshots once, derives, and returns the
serialized payload. Fetch failures propagate unchanged.
"""

import logging
from collections.abc import Awaitable, Callable

from netview.config import settings
from netview.core.errors import UnknownView
from netview.derived_views.neighbor import interface_neighbor_expected_view
from netview.derived_views.portchannel import interface_portchannel_view
from netview.services.naming import NamingMode
from netview.services.table_fetcher import TableFetcher

logger = logging.getLogger("netview.views")

ViewProducer = Callable[..., Awaitable[bytes]]

VIEWS: dict[str, ViewProducer] = {
    "interface/portchannel": interface_portchannel_view,
    "interface/neighbor/expected": interface_neighbor_expected_view,
}


def normalize_path(path: str) -> str:
    """`/interface//portchannel/` -> `interface/portchannel`."""
    return "/".join(part for part in path.split("/") if part)


async def run_view(
    path: str,
    fetcher: TableFetcher,
    *,
    naming_mode: NamingMode | str | None = None,
    concurrently: bool | None = None,
) -> bytes:
    """Run the view registered for `path`. Raises UnknownView for unregistered paths."""
    key = normalize_path(path)
    producer = VIEWS.get(key)
    if producer is None:
        raise UnknownView(key)

    # Resolved once here; producers never read settings themselves.
    mode = NamingMode(naming_mode or settings.interface_naming_mode)
    if concurrently is None:
        concurrently = settings.fetch_concurrently

    logger.info("Running view=%s naming_mode=%s", key, mode.value)
    return await producer(fetcher, naming_mode=mode, concurrently=concurrently)
