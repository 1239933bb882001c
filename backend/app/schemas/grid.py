"""Wire DTOs for the grid API. Field names are camelCase on the wire."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SensorDataIn(CamelModel):
    sensor_id: str
    node_id: str
    timestamp: str          # ISO-8601, parsed per item by the ingestion service
    load_reading: float     # MW
    voltage: float          # kV
    frequency: float        # Hz


class OptimizationActionIn(CamelModel):
    from_node_id: str
    to_node_id: str
    amount: float
    action_type: str
    timestamp: str


class MessageResponse(BaseModel):
    message: str


class NodeStatus(CamelModel):
    node_id: str
    region: str
    current_load: float
    capacity: float
    utilization_percent: float
    last_updated: Optional[datetime] = None


class GridStatusResponse(CamelModel):
    timestamp: datetime
    total_nodes: int
    total_load: float
    total_capacity: float
    average_utilization: float
    overloaded_nodes: int
    nodes: List[NodeStatus]
