from sqlalchemy import Column, Integer, String, Float, DateTime
from app.database import Base


class GridNode(Base):
    __tablename__ = "grid_nodes"

    id = Column(Integer, primary_key=True, index=True)
    node_id = Column(String(100), unique=True, index=True, nullable=False)
    region = Column(String(100), nullable=False, default="Unknown")
    capacity = Column(Float, nullable=False, default=100.0)  # MW
    last_updated = Column(DateTime)

    def to_dict(self):
        return {
            "id": self.id,
            "node_id": self.node_id,
            "region": self.region,
            "capacity": self.capacity,
            "last_updated": self.last_updated.isoformat() if self.last_updated else None
        }
