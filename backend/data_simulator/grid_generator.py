# grid_generator.py
import logging
import random
from typing import Dict, List, Optional

from .constants import *
from .utils import clamp, iso_now, sample_range

logger = logging.getLogger(__name__)


class SimNode:
    """A substation in the simulated grid. Loads and capacities in MW."""

    def __init__(self, node_id: str, region: str, capacity: float, current_load: float = 0.0):
        self.node_id = node_id
        self.region = region
        self.capacity = capacity
        self.current_load = current_load

    @property
    def utilization_percent(self) -> float:
        if self.capacity <= 0:
            return 0.0
        return self.current_load * 100.0 / self.capacity

    @property
    def available_capacity(self) -> float:
        return max(0.0, self.capacity - self.current_load)

    def is_overloaded(self, threshold: float) -> bool:
        return self.utilization_percent > threshold

    def __repr__(self):
        return (f"SimNode({self.node_id}, {self.region}, load={self.current_load:.2f}/"
                f"{self.capacity:.2f} MW, {self.utilization_percent:.1f}%)")


class LoadSource:
    """A consumer (positive load) or producer (negative load) attached to the grid."""

    def __init__(self, source_id: str, source_type: str, base_load: float, variability: float):
        self.source_id = source_id
        self.source_type = source_type
        self.base_load = base_load
        self.variability = clamp(variability, 0.0, 1.0)

    def current_load(self) -> float:
        variation = (random.random() - 0.5) * 2 * self.variability
        load = abs(self.base_load * (1 + variation))
        return -load if self.source_type == SOURCE_PRODUCER else load


class GridSimulator:
    """
    Simulated grid: a set of nodes, each fed by an equal slice of the load
    sources. Every update draws a fresh load for each node from its sources.
    """
    def __init__(self, nodes: Optional[List[SimNode]] = None, num_nodes: int = 10,
                 num_load_sources: int = 50, base_capacity: float = 100.0):
        self.nodes = nodes if nodes is not None else self.default_nodes(num_nodes, base_capacity)
        self.load_sources = [self._make_source(i) for i in range(num_load_sources)]
        logger.info("Initialized grid with %d nodes and %d load sources",
                    len(self.nodes), len(self.load_sources))

    @staticmethod
    def default_nodes(num_nodes: int, base_capacity: float) -> List[SimNode]:
        return [
            SimNode(
                node_id=f"NODE-{i + 1}",
                region=REGIONS[i % len(REGIONS)],
                capacity=base_capacity + random.uniform(0, NODE_CAPACITY_SPREAD),
            )
            for i in range(num_nodes)
        ]

    @staticmethod
    def _make_source(i: int) -> LoadSource:
        source_type = SOURCE_PRODUCER if i % PRODUCER_EVERY == 0 else SOURCE_CONSUMER
        return LoadSource(
            source_id=f"SOURCE-{i + 1}",
            source_type=source_type,
            base_load=sample_range(SOURCE_BASE_LOAD_RANGE),
            variability=sample_range(SOURCE_VARIABILITY_RANGE),
        )

    def sources_for(self, index: int) -> List[LoadSource]:
        if not self.nodes:
            return []
        per_node = len(self.load_sources) // len(self.nodes)
        start = index * per_node
        return self.load_sources[start:start + per_node]

    def update_loads(self):
        for index, node in enumerate(self.nodes):
            total = sum(source.current_load() for source in self.sources_for(index))
            node.current_load = max(0.0, total)

    def totals(self) -> Dict[str, float]:
        total_load = sum(n.current_load for n in self.nodes)
        total_capacity = sum(n.capacity for n in self.nodes)
        utilization = total_load * 100.0 / total_capacity if total_capacity > 0 else 0.0
        return {"total_load": total_load, "total_capacity": total_capacity, "utilization": utilization}

    def sensor_payload(self) -> List[Dict]:
        """One reading per node, in the API's wire format."""
        timestamp = iso_now()
        return [
            {
                "sensorId": f"SENSOR-{node.node_id}",
                "nodeId": node.node_id,
                "timestamp": timestamp,
                "loadReading": round(node.current_load, 3),
                "voltage": round(sample_range(VOLTAGE_RANGE), 2),
                "frequency": round(sample_range(FREQUENCY_RANGE), 3),
            }
            for node in self.nodes
        ]
