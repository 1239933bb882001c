from sqlalchemy import Column, Float, String, DateTime, Integer, Index
from app.database import Base


class SensorReading(Base):
    __tablename__ = "sensor_readings"
    __table_args__ = (
        Index("ix_sensor_readings_node_id_timestamp", "node_id", "timestamp"),
    )

    id = Column(Integer, primary_key=True, index=True)
    sensor_id = Column(String(100), nullable=False)
    # No foreign key: readings are accepted even if the node row is missing
    node_id = Column(String(100), nullable=False)
    timestamp = Column(DateTime, nullable=False)
    load_reading = Column(Float, nullable=False)  # MW
    voltage = Column(Float)  # kV
    frequency = Column(Float)  # Hz

    def to_dict(self):
        return {
            "id": self.id,
            "sensor_id": self.sensor_id,
            "node_id": self.node_id,
            "timestamp": self.timestamp.isoformat(),
            "load_reading": self.load_reading,
            "voltage": self.voltage,
            "frequency": self.frequency
        }
