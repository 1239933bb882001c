import logging
from typing import Dict, List

from .constants import ACTION_LOAD_TRANSFER, MAX_TRANSFER_SHARE
from .utils import iso_now

logger = logging.getLogger(__name__)


class LoadBalancer:
    """Moves load off overloaded nodes onto nodes with spare capacity.

    Thresholds are utilization percentages. A node is overloaded above
    overload_threshold and can receive load below underload_threshold.
    """

    def __init__(self, overload_threshold: float = 85.0, underload_threshold: float = 40.0):
        self.overload_threshold = overload_threshold
        self.underload_threshold = underload_threshold

    def detect_overloaded_nodes(self, nodes) -> List:
        return [n for n in nodes if n.is_overloaded(self.overload_threshold)]

    def optimize(self, nodes) -> List[Dict]:
        """Rebalance nodes in place and return the transfers made, in wire format."""
        overloaded = self.detect_overloaded_nodes(nodes)
        underloaded = [
            n for n in nodes
            if n.utilization_percent < self.underload_threshold
            and n.available_capacity > 0
        ]
        if not overloaded:
            logger.debug("No overloaded nodes detected")
            return []

        overloaded.sort(key=lambda n: n.utilization_percent, reverse=True)
        underloaded.sort(key=lambda n: n.available_capacity, reverse=True)

        actions = []
        timestamp = iso_now()
        for source in overloaded:
            excess = source.current_load - source.capacity * (self.overload_threshold / 100.0)
            for target in underloaded:
                if excess <= 0:
                    break
                available = target.available_capacity
                if available <= 0:
                    continue
                amount = min(excess, available * MAX_TRANSFER_SHARE)
                source.current_load -= amount
                target.current_load += amount
                excess -= amount
                actions.append({
                    "fromNodeId": source.node_id,
                    "toNodeId": target.node_id,
                    "amount": round(amount, 3),
                    "actionType": ACTION_LOAD_TRANSFER,
                    "timestamp": timestamp,
                })
                logger.info("Transferred %.2f MW from %s to %s", amount, source.node_id, target.node_id)
        return actions
