"""
Batch ingestion of sensor telemetry and optimization actions.

Items in a batch are handled independently: an item whose timestamp cannot be
parsed is skipped and reported in the IngestResult, the rest of the batch is
still stored. Everything accepted is committed once, at the end of the batch.
A database error is not an item-level problem; the batch is rolled back and
the error propagates to the caller.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.grid_node import GridNode
from app.models.load_event import LoadEvent, EVENT_NORMAL
from app.models.optimization_action import OptimizationAction
from app.models.sensor_reading import SensorReading
from app.services.timestamps import parse_timestamp, utc_now

logger = logging.getLogger(__name__)

DEFAULT_REGION = "Unknown"
DEFAULT_CAPACITY = 100.0

_INSERT_IGNORE = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


@dataclass
class ItemOutcome:
    index: int
    ok: bool
    reason: Optional[str] = None


@dataclass
class IngestResult:
    received: int
    outcomes: List[ItemOutcome] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if not o.ok)

    def ok(self, index: int):
        self.outcomes.append(ItemOutcome(index=index, ok=True))

    def skip(self, index: int, reason: str):
        self.outcomes.append(ItemOutcome(index=index, ok=False, reason=reason))


def _node_exists(db: Session, node_id: str) -> bool:
    return db.query(GridNode.id).filter(GridNode.node_id == node_id).first() is not None


def ensure_grid_node(db: Session, node_id: str) -> bool:
    """Register node_id with default region and capacity if it is unknown.

    The insert is idempotent on the unique node_id, so a node created by a
    concurrent request in the meantime is left alone. Returns True when this
    call created the node.
    """
    if _node_exists(db, node_id):
        return False

    values = {
        "node_id": node_id,
        "region": DEFAULT_REGION,
        "capacity": DEFAULT_CAPACITY,
        "last_updated": utc_now(),
    }
    insert = _INSERT_IGNORE.get(db.get_bind().dialect.name)
    if insert is not None:
        stmt = insert(GridNode.__table__).values(**values).on_conflict_do_nothing(index_elements=["node_id"])
        created = db.execute(stmt).rowcount == 1
    else:
        try:
            with db.begin_nested():
                db.add(GridNode(**values))
            created = True
        except IntegrityError:
            created = False

    if created:
        logger.info("Registered new grid node %s (region=%s, capacity=%.1f)",
                    node_id, DEFAULT_REGION, DEFAULT_CAPACITY)
    else:
        logger.info("Grid node %s was registered concurrently", node_id)
    return created


def _commit(db: Session):
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def ingest_sensor_batch(db: Session, readings: Iterable) -> IngestResult:
    """Store a batch of sensor readings and their derived load events."""
    readings = list(readings)
    result = IngestResult(received=len(readings))
    known_nodes = set()

    try:
        for index, data in enumerate(readings):
            try:
                timestamp = parse_timestamp(data.timestamp)
            except ValueError as e:
                logger.warning("Skipping sensor reading from %s: %s", data.sensor_id, e)
                result.skip(index, f"invalid timestamp {data.timestamp!r}")
                continue

            if data.node_id not in known_nodes:
                ensure_grid_node(db, data.node_id)
                known_nodes.add(data.node_id)

            db.add(SensorReading(
                sensor_id=data.sensor_id,
                node_id=data.node_id,
                timestamp=timestamp,
                load_reading=data.load_reading,
                voltage=data.voltage,
                frequency=data.frequency,
            ))
            # Utilization and classification are not computed here; the grid
            # status aggregator works them out from capacity at read time.
            db.add(LoadEvent(
                node_id=data.node_id,
                timestamp=timestamp,
                load_value=data.load_reading,
                utilization_percent=0.0,
                event_type=EVENT_NORMAL,
            ))
            result.ok(index)
    except SQLAlchemyError:
        db.rollback()
        raise

    _commit(db)
    logger.info("Processed %d sensor readings (%d skipped)", result.processed, result.skipped)
    return result


def ingest_optimization_batch(db: Session, actions: Iterable) -> IngestResult:
    """Store a batch of optimization actions as received."""
    actions = list(actions)
    result = IngestResult(received=len(actions))

    for index, action in enumerate(actions):
        try:
            timestamp = parse_timestamp(action.timestamp)
        except ValueError as e:
            logger.warning("Skipping optimization action %s -> %s: %s",
                           action.from_node_id, action.to_node_id, e)
            result.skip(index, f"invalid timestamp {action.timestamp!r}")
            continue

        db.add(OptimizationAction(
            from_node_id=action.from_node_id,
            to_node_id=action.to_node_id,
            amount=action.amount,
            action_type=action.action_type,
            timestamp=timestamp,
        ))
        result.ok(index)

    _commit(db)
    logger.info("Processed %d optimization actions (%d skipped)", result.processed, result.skipped)
    return result
