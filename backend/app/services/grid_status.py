import logging
from typing import Dict

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.grid_node import GridNode
from app.models.sensor_reading import SensorReading
from app.services.timestamps import as_utc, utc_now

logger = logging.getLogger(__name__)

OVERLOAD_THRESHOLD_PERCENT = 85.0


def utilization_percent(load: float, capacity: float) -> float:
    if capacity and capacity > 0:
        return load * 100.0 / capacity
    return 0.0


def is_overloaded(utilization: float) -> bool:
    return utilization > OVERLOAD_THRESHOLD_PERCENT


def latest_readings_by_node(db: Session) -> Dict[str, SensorReading]:
    """Most recent reading per node_id.

    When several readings share the newest timestamp the last inserted one
    wins.
    """
    subq = (
        db.query(
            SensorReading.node_id.label("node_id"),
            func.max(SensorReading.timestamp).label("max_ts"),
        )
        .group_by(SensorReading.node_id)
        .subquery()
    )
    latest = (
        db.query(SensorReading)
        .join(subq, (SensorReading.node_id == subq.c.node_id) & (SensorReading.timestamp == subq.c.max_ts))
        .order_by(SensorReading.id)
        .all()
    )
    return {r.node_id: r for r in latest}


def compute_grid_status(db: Session) -> dict:
    """Current grid-wide snapshot: per-node utilization plus totals.

    Nodes without any reading report zero load as of their own last_updated.
    Read-only.
    """
    nodes = db.query(GridNode).all()
    latest_map = latest_readings_by_node(db)

    node_statuses = []
    total_load = 0.0
    total_capacity = 0.0
    overloaded_nodes = 0

    for node in nodes:
        reading = latest_map.get(node.node_id)
        current_load = float(reading.load_reading) if reading else 0.0
        capacity = float(node.capacity or 0.0)
        utilization = utilization_percent(current_load, capacity)

        if is_overloaded(utilization):
            overloaded_nodes += 1

        node_statuses.append({
            "node_id": node.node_id,
            "region": node.region,
            "current_load": current_load,
            "capacity": capacity,
            "utilization_percent": utilization,
            "last_updated": as_utc(reading.timestamp if reading else node.last_updated),
        })
        total_load += current_load
        total_capacity += capacity

    if overloaded_nodes:
        logger.debug("%d of %d nodes above %.0f%% utilization",
                     overloaded_nodes, len(nodes), OVERLOAD_THRESHOLD_PERCENT)

    return {
        "timestamp": as_utc(utc_now()),
        "total_nodes": len(nodes),
        "total_load": total_load,
        "total_capacity": total_capacity,
        "average_utilization": utilization_percent(total_load, total_capacity),
        "overloaded_nodes": overloaded_nodes,
        "nodes": node_statuses,
    }
