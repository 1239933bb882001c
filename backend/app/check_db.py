from sqlalchemy.exc import SQLAlchemyError

from app.database import SessionLocal
from app.models.grid_node import GridNode
from app.models.sensor_reading import SensorReading
from app.models.optimization_action import OptimizationAction

def check_db():
    db = SessionLocal()
    try:
        nodes = db.query(GridNode).all()
        if nodes:
            print(f"Found {len(nodes)} grid nodes:")
            for node in nodes:
                print(f"- {node.node_id} ({node.region}, {node.capacity:.1f} MW)")
        else:
            print("No grid nodes found in database!")
        print(f"Sensor readings: {db.query(SensorReading).count()}")
        print(f"Optimization actions: {db.query(OptimizationAction).count()}")
    except SQLAlchemyError as e:
        print(f"Error checking database: {e}")
    finally:
        db.close()

if __name__ == "__main__":
    check_db()
