"""Field access over table snapshots.

Every derived value reads the store through these helpers. A missing row
and a missing field are the same thing here: both return the default.
Store values are untyped strings; the typed helpers convert them at this
boundary so the view rules work with booleans and enums.
"""

import enum
from collections.abc import Mapping

# Separators used inside composite row keys.
STATE_KEY_DELIMITER = "|"
APPL_KEY_DELIMITER = ":"


class OperStatus(str, enum.Enum):
    up = "up"
    down = "down"
    unavailable = "unavailable"

    @classmethod
    def parse(cls, value: str) -> "OperStatus":
        value = value.lower()
        if value == "up":
            return cls.up
        if value == "down":
            return cls.down
        return cls.unavailable

    @property
    def marker(self) -> str:
        return _OPER_MARKERS[self]


_OPER_MARKERS = {
    OperStatus.up: "(Up)",
    OperStatus.down: "(Dw)",
    OperStatus.unavailable: "(N/A)",
}


def make_key(entity: str, member: str, delimiter: str) -> str:
    """Build a composite row key, e.g. `PortChannel101|Ethernet0`."""
    return f"{entity}{delimiter}{member}"


def get_field(
    table: Mapping[str, Mapping[str, str]],
    key: str,
    field: str,
    default: str = "",
    *,
    member: str | None = None,
    delimiter: str = STATE_KEY_DELIMITER,
) -> str:
    """Return `table[key][field]` as a string, or `default` when absent.

    With `member`, the row key is the composite of `key` and `member`
    joined by `delimiter`.
    """
    if member is not None:
        key = make_key(key, member, delimiter)
    row = table.get(key)
    if not row:
        return default
    value = row.get(field)
    if value is None:
        return default
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def get_flag(
    table: Mapping[str, Mapping[str, str]],
    key: str,
    field: str,
    *,
    member: str | None = None,
    delimiter: str = STATE_KEY_DELIMITER,
) -> bool:
    """True only when the field holds the string "true"."""
    return get_field(table, key, field, member=member, delimiter=delimiter) == "true"


def get_oper_status(
    table: Mapping[str, Mapping[str, str]],
    key: str,
    field: str = "oper_status",
) -> OperStatus:
    return OperStatus.parse(get_field(table, key, field))
