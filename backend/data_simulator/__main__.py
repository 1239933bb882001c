"""Run the grid simulator against a live API: python -m data_simulator [cycles]"""
import logging
import sys
import time

from app.config import settings

from .api_client import GridApiClient
from .grid_generator import GridSimulator
from .load_balancer import LoadBalancer

logger = logging.getLogger("data_simulator")


def run(cycles: int):
    simulator = GridSimulator(
        num_nodes=settings.SIM_NODES,
        num_load_sources=settings.SIM_LOAD_SOURCES,
        base_capacity=settings.SIM_NODE_BASE_CAPACITY,
    )
    balancer = LoadBalancer(settings.SIM_OVERLOAD_THRESHOLD, settings.SIM_UNDERLOAD_THRESHOLD)
    client = GridApiClient(settings.API_ENDPOINT)

    try:
        for cycle in range(cycles):
            simulator.update_loads()
            client.send_sensor_data(simulator.sensor_payload())

            overloaded = balancer.detect_overloaded_nodes(simulator.nodes)
            for node in overloaded:
                logger.warning("Overloaded: %r", node)
            actions = balancer.optimize(simulator.nodes)
            if actions:
                client.send_optimization_actions(actions)

            totals = simulator.totals()
            logger.info("Cycle %d: %.2f / %.2f MW (%.1f%% utilization), %d transfers",
                        cycle + 1, totals["total_load"], totals["total_capacity"],
                        totals["utilization"], len(actions))
            if cycle + 1 < cycles:
                time.sleep(settings.SIM_INTERVAL_SECONDS)
    except KeyboardInterrupt:
        logger.info("Shutdown signal received")
    finally:
        client.close()


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    run(int(sys.argv[1]) if len(sys.argv) > 1 else 30)
