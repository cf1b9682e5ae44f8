"""Show routers: derived views of device state.

Endpoints:
- GET /show/interface/portchannel: Port channels with protocol and member flags
- GET /show/interface/neighbor/expected: Expected neighbors per interface
- GET /show/{path}: Any registered view by path

Payloads are passed through byte-for-byte as produced by the view.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from netview.dependencies import get_fetcher
from netview.services import show_service
from netview.services.naming import NamingMode
from netview.services.table_fetcher import TableFetcher

router = APIRouter(prefix="/show", tags=["show"])


def _json(payload: bytes) -> Response:
    return Response(content=payload, media_type="application/json")


@router.get("/interface/portchannel")
async def interface_portchannel(
    naming_mode: NamingMode | None = None,
    fetcher: TableFetcher = Depends(get_fetcher),
):
    """Port channels keyed by team id.

    `naming_mode` overrides the configured interface naming mode for this request.
    """
    payload = await show_service.run_view(
        "interface/portchannel", fetcher, naming_mode=naming_mode
    )
    return _json(payload)


@router.get("/interface/neighbor/expected")
async def interface_neighbor_expected(
    naming_mode: NamingMode | None = None,
    fetcher: TableFetcher = Depends(get_fetcher),
):
    """Expected neighbors keyed by local interface.

    `naming_mode` is accepted like on every show route; keys stay raw
    interface names in both modes.
    """
    payload = await show_service.run_view(
        "interface/neighbor/expected", fetcher, naming_mode=naming_mode
    )
    return _json(payload)


@router.get("/{path:path}")
async def show_path(
    path: str,
    naming_mode: NamingMode | None = None,
    fetcher: TableFetcher = Depends(get_fetcher),
):
    """Generic dispatch; unknown paths return 404."""
    payload = await show_service.run_view(path, fetcher, naming_mode=naming_mode)
    return _json(payload)
