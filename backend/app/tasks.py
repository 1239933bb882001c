import logging

from celery import Celery
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.database import SessionLocal
from app.models.grid_node import GridNode
from app.schemas.grid import OptimizationActionIn, SensorDataIn
from app.services.ingestion import ingest_optimization_batch, ingest_sensor_batch
from data_simulator.grid_generator import GridSimulator, SimNode
from data_simulator.load_balancer import LoadBalancer

logger = logging.getLogger(__name__)

# Celery Configuration
celery_app = Celery('tasks', broker=settings.REDIS_URL)
celery_app.conf.update(
    task_serializer='json',
    accept_content=['json'],
    result_serializer='json',
    timezone='UTC',
    enable_utc=True,
)

celery_app.conf.beat_schedule = {
    'simulate-grid-cycle': {
        'task': 'app.tasks.simulate_grid_cycle',
        'schedule': float(settings.SIM_INTERVAL_SECONDS),
    },
}


def build_simulator(db) -> GridSimulator:
    """Simulator over the stored nodes, or the default node set if none exist yet."""
    stored = db.query(GridNode).all()
    nodes = [SimNode(n.node_id, n.region, n.capacity) for n in stored] or None
    return GridSimulator(
        nodes=nodes,
        num_nodes=settings.SIM_NODES,
        num_load_sources=settings.SIM_LOAD_SOURCES,
        base_capacity=settings.SIM_NODE_BASE_CAPACITY,
    )


def run_simulation_cycle(db) -> dict:
    """One simulator tick: fresh loads, sensor readings, then rebalancing."""
    simulator = build_simulator(db)
    simulator.update_loads()
    readings = [SensorDataIn.model_validate(r) for r in simulator.sensor_payload()]
    sensor_result = ingest_sensor_batch(db, readings)

    balancer = LoadBalancer(settings.SIM_OVERLOAD_THRESHOLD, settings.SIM_UNDERLOAD_THRESHOLD)
    overloaded = balancer.detect_overloaded_nodes(simulator.nodes)
    if overloaded:
        logger.warning("Detected %d overloaded nodes", len(overloaded))
    actions = [OptimizationActionIn.model_validate(a) for a in balancer.optimize(simulator.nodes)]
    action_count = 0
    if actions:
        action_count = ingest_optimization_batch(db, actions).processed

    return {"readings": sensor_result.processed, "actions": action_count}


@celery_app.task(bind=True)
def simulate_grid_cycle(self):
    """Generate and store one cycle of simulated grid telemetry"""
    db = SessionLocal()
    try:
        summary = run_simulation_cycle(db)
        logger.info("Simulation cycle stored %d readings and %d actions",
                    summary["readings"], summary["actions"])
        return summary
    except SQLAlchemyError:
        logger.exception("Simulation cycle failed")
        raise
    finally:
        db.close()
