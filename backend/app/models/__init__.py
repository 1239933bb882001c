# Import every model so Base.metadata knows about all tables
from app.models.grid_node import GridNode
from app.models.sensor_reading import SensorReading
from app.models.load_event import LoadEvent
from app.models.optimization_action import OptimizationAction

__all__ = ['GridNode', 'SensorReading', 'LoadEvent', 'OptimizationAction']
