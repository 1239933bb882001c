import logging
from typing import Dict, List

import httpx

logger = logging.getLogger(__name__)


class GridApiClient:
    """Posts simulator batches to the grid API. Failures are logged, not raised."""

    def __init__(self, base_url: str, timeout: float = 10.0, transport=None):
        self.base_url = base_url.rstrip("/")
        self.client = httpx.Client(base_url=self.base_url, timeout=timeout, transport=transport)

    def _post(self, path: str, payload: List[Dict], label: str) -> bool:
        try:
            response = self.client.post(path, json=payload)
        except httpx.HTTPError as e:
            logger.error("Failed to send %s to %s: %s", label, self.base_url, e)
            return False
        if response.is_success:
            logger.debug("Sent %d %s", len(payload), label)
            return True
        logger.warning("API returned status %d for %s", response.status_code, label)
        return False

    def send_sensor_data(self, readings: List[Dict]) -> bool:
        return self._post("/api/sensordata", readings, "sensor readings")

    def send_optimization_actions(self, actions: List[Dict]) -> bool:
        return self._post("/api/control/optimize", actions, "optimization actions")

    def close(self):
        self.client.close()
