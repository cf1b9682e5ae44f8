"""Interface naming: raw names vs. configured aliases.

The alias table is the CONFIG_DB PORT table; a port without an alias is
shown by its raw name.
"""

import enum
from collections.abc import Mapping

from netview.derived_views.fields import get_field

PORT_TABLE = ("CONFIG_DB", "PORT")


class NamingMode(str, enum.Enum):
    default = "default"
    alias = "alias"


class AliasResolver:
    """Maps raw interface names to display names."""

    def __init__(self, port_table: Mapping[str, Mapping[str, str]]):
        self._port_table = port_table

    def display_name(self, name: str) -> str:
        return get_field(self._port_table, name, "alias") or name
