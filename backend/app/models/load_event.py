from sqlalchemy import Column, Float, String, DateTime, Integer, Index, CheckConstraint
from app.database import Base

EVENT_NORMAL = "NORMAL"
EVENT_OVERLOAD = "OVERLOAD"
EVENT_UNDERLOAD = "UNDERLOAD"
EVENT_TYPES = (EVENT_NORMAL, EVENT_OVERLOAD, EVENT_UNDERLOAD)


class LoadEvent(Base):
    __tablename__ = "load_events"
    __table_args__ = (
        Index("ix_load_events_node_id_timestamp", "node_id", "timestamp"),
        CheckConstraint(
            "event_type IN (%s)" % ", ".join(f"'{t}'" for t in EVENT_TYPES),
            name="ck_load_events_event_type",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    node_id = Column(String(100), nullable=False)
    timestamp = Column(DateTime, nullable=False)
    load_value = Column(Float, nullable=False)
    utilization_percent = Column(Float, nullable=False, default=0.0)
    event_type = Column(String(20), nullable=False, default=EVENT_NORMAL)

    def to_dict(self):
        return {
            "id": self.id,
            "node_id": self.node_id,
            "timestamp": self.timestamp.isoformat(),
            "load_value": self.load_value,
            "utilization_percent": self.utilization_percent,
            "event_type": self.event_type
        }
