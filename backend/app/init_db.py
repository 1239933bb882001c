import logging

from app.database import SessionLocal, Base, engine

# Import all models to ensure they are registered with SQLAlchemy
from app.models.grid_node import GridNode
from app import models  # noqa: F401
from app.services.timestamps import utc_now

logger = logging.getLogger(__name__)

SAMPLE_NODES = [
    ("NODE-1", "North", 120.0),
    ("NODE-2", "South", 110.0),
    ("NODE-3", "East", 135.0),
    ("NODE-4", "West", 100.0),
    ("NODE-5", "Central", 150.0),
]

def init_db():
    # Create all tables
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        existing = db.query(GridNode).first()
        if existing is None:
            now = utc_now()
            for node_id, region, capacity in SAMPLE_NODES:
                db.add(GridNode(node_id=node_id, region=region, capacity=capacity, last_updated=now))
            db.commit()
            logger.info("Seeded %d sample grid nodes", len(SAMPLE_NODES))
        else:
            logger.info("Database already contains grid nodes. Skipping seeding.")

    except Exception:
        logger.exception("Error initializing database")
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    logger.info("Initializing database...")
    init_db()
    logger.info("Database initialization completed!")
