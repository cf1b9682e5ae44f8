"""Show view schemas: one record per reported entity.

Field declaration order is the serialized field order.
"""

from pydantic import BaseModel, Field


class PortchannelRecord(BaseModel):
    team_dev: str = Field(alias="Team Dev")
    protocol: str = Field(alias="Protocol")
    ports: str = Field(alias="Ports")

    model_config = {"populate_by_name": True, "frozen": True}


class NeighborExpectedRecord(BaseModel):
    """Expected neighbor of one local interface. Unknown values are "None"."""
    neighbor: str = "None"
    neighbor_port: str = "None"
    neighbor_loopback: str = "None"
    neighbor_mgmt: str = "None"
    neighbor_type: str = "None"

    model_config = {"frozen": True}
