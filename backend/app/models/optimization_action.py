from sqlalchemy import Column, Float, String, DateTime, Integer
from app.database import Base


class OptimizationAction(Base):
    __tablename__ = "optimization_actions"

    id = Column(Integer, primary_key=True, index=True)
    from_node_id = Column(String(100), nullable=False)
    to_node_id = Column(String(100), nullable=False)
    amount = Column(Float, nullable=False)  # MW
    action_type = Column(String(50), nullable=False)  # e.g. "LOAD_TRANSFER"
    timestamp = Column(DateTime, nullable=False, index=True)

    def to_dict(self):
        return {
            "id": self.id,
            "from_node_id": self.from_node_id,
            "to_node_id": self.to_node_id,
            "amount": self.amount,
            "action_type": self.action_type,
            "timestamp": self.timestamp.isoformat()
        }
