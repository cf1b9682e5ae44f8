"""Port channel view ("show interfaces portchannel").

One record per port channel configured in CONFIG_DB, keyed by team id:

    {"101": {"Team Dev": "PortChannel101", "Protocol": "LACP(A)(Up)", "Ports": "Ethernet0(S)"}}

Flags: A active, I inactive, Up up, Dw down, N/A not available,
S selected, D deselected, * not synced.

Sources:
- CONFIG_DB PORTCHANNEL             which port channels exist
- STATE_DB  LAG_TABLE               runner.active
- APPL_DB   LAG_TABLE               oper_status
- STATE_DB  LAG_MEMBER_TABLE        runner.aggregator.selected (key `pc|member`)
- APPL_DB   LAG_MEMBER_TABLE        status enabled/disabled (key `pc:member`)
"""

import logging
from collections.abc import Mapping
from typing import NamedTuple

from netview.derived_views.fields import (
    APPL_KEY_DELIMITER,
    STATE_KEY_DELIMITER,
    OperStatus,
    get_field,
    get_flag,
    get_oper_status,
    make_key,
)
from netview.derived_views.render import render_view, serialize_view
from netview.schemas.show import PortchannelRecord
from netview.services.naming import PORT_TABLE, AliasResolver, NamingMode
from netview.services.table_fetcher import TableFetcher, TableSnapshot, fetch_snapshots

logger = logging.getLogger("netview.views")

PORTCHANNEL_PREFIX = "PortChannel"
PROTOCOL = "LACP"

CONFIG_PORTCHANNEL = ("CONFIG_DB", "PORTCHANNEL")
STATE_LAG = ("STATE_DB", "LAG_TABLE")
APPL_LAG = ("APPL_DB", "LAG_TABLE")
STATE_LAG_MEMBER = ("STATE_DB", "LAG_MEMBER_TABLE")
APPL_LAG_MEMBER = ("APPL_DB", "LAG_MEMBER_TABLE")

TABLES = (CONFIG_PORTCHANNEL, STATE_LAG, APPL_LAG, STATE_LAG_MEMBER, APPL_LAG_MEMBER)


class PortchannelContext(NamedTuple):
    """Snapshots for one query. Built once, never mutated."""
    config_portchannel: TableSnapshot
    state_lag: TableSnapshot
    appl_lag: TableSnapshot
    state_lag_member: TableSnapshot
    appl_lag_member: TableSnapshot
    naming_mode: NamingMode = NamingMode.default
    alias_resolver: AliasResolver | None = None


class MemberStatus(NamedTuple):
    name: str
    selected: bool
    # enabled / disabled / "" when the forwarding plane has no row
    status: str

    @property
    def unsynced(self) -> bool:
        return is_unsynced(self.status, self.selected)


def enumerate_portchannels(
    config_table: Mapping[str, Mapping[str, str]],
    prefix: str = PORTCHANNEL_PREFIX,
) -> list[str]:
    """Port channel names in source order; a bare prefix is not a name."""
    return [name for name in config_table if name.startswith(prefix) and name != prefix]


def team_id(name: str, prefix: str = PORTCHANNEL_PREFIX) -> str:
    """`PortChannel101` -> `101`. Names without the prefix are kept whole."""
    if name.startswith(prefix) and len(name) > len(prefix):
        return name[len(prefix):]
    return name


def is_active(ctx: PortchannelContext, name: str) -> bool:
    return get_flag(ctx.state_lag, name, "runner.active")


def oper_status(ctx: PortchannelContext, name: str) -> OperStatus:
    return get_oper_status(ctx.appl_lag, name)


def protocol_label(active: bool, oper: OperStatus) -> str:
    return PROTOCOL + ("(A)" if active else "(I)") + oper.marker


def member_names(ctx: PortchannelContext, name: str) -> list[str]:
    prefix = make_key(name, "", STATE_KEY_DELIMITER)
    return sorted(key[len(prefix):] for key in ctx.state_lag_member if key.startswith(prefix))


def is_unsynced(status: str, selected: bool) -> bool:
    """Control plane selection disagrees with, or is unknown to, the forwarding plane."""
    return (
        status == ""
        or (status == "enabled" and not selected)
        or (status == "disabled" and selected)
    )


def member_status(ctx: PortchannelContext, name: str, member: str) -> MemberStatus:
    selected = get_flag(
        ctx.state_lag_member, name, "runner.aggregator.selected",
        member=member, delimiter=STATE_KEY_DELIMITER,
    )
    status = get_field(
        ctx.appl_lag_member, name, "status",
        member=member, delimiter=APPL_KEY_DELIMITER,
    )
    return MemberStatus(name=member, selected=selected, status=status)


def member_display(ctx: PortchannelContext, member: MemberStatus) -> str:
    display = member.name
    if ctx.naming_mode == NamingMode.alias and ctx.alias_resolver is not None:
        display = ctx.alias_resolver.display_name(member.name)
    display += "(S)" if member.selected else "(D)"
    if member.unsynced:
        display += "*"
    return display


def ports_display(ctx: PortchannelContext, name: str) -> str:
    return " ".join(
        member_display(ctx, member_status(ctx, name, member))
        for member in member_names(ctx, name)
    )


def derive_portchannel(ctx: PortchannelContext, name: str) -> PortchannelRecord:
    return PortchannelRecord(
        team_dev=name,
        protocol=protocol_label(is_active(ctx, name), oper_status(ctx, name)),
        ports=ports_display(ctx, name),
    )


def build_portchannel_records(ctx: PortchannelContext) -> dict[str, PortchannelRecord]:
    return {
        team_id(name): derive_portchannel(ctx, name)
        for name in enumerate_portchannels(ctx.config_portchannel)
    }


async def load_portchannel_context(
    fetcher: TableFetcher,
    *,
    naming_mode: NamingMode = NamingMode.default,
    concurrently: bool = False,
) -> PortchannelContext:
    """Fetch every table the view needs, then freeze them into one context.

    The PORT table is only fetched in alias mode.
    """
    queries = list(TABLES)
    if naming_mode == NamingMode.alias:
        queries.append(PORT_TABLE)
    snapshots = await fetch_snapshots(fetcher, queries, concurrently=concurrently)

    resolver = None
    if naming_mode == NamingMode.alias:
        resolver = AliasResolver(snapshots[PORT_TABLE])

    return PortchannelContext(
        config_portchannel=snapshots[CONFIG_PORTCHANNEL],
        state_lag=snapshots[STATE_LAG],
        appl_lag=snapshots[APPL_LAG],
        state_lag_member=snapshots[STATE_LAG_MEMBER],
        appl_lag_member=snapshots[APPL_LAG_MEMBER],
        naming_mode=naming_mode,
        alias_resolver=resolver,
    )


async def interface_portchannel_view(
    fetcher: TableFetcher,
    *,
    naming_mode: NamingMode = NamingMode.default,
    concurrently: bool = False,
) -> bytes:
    ctx = await load_portchannel_context(
        fetcher, naming_mode=naming_mode, concurrently=concurrently
    )
    records = build_portchannel_records(ctx)
    logger.debug("portchannel view: %d port channels", len(records))
    return serialize_view(render_view(records))
