"""
Lot activity model (append-only history)
"""
from enum import Enum

from sqlalchemy import JSON, CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from avotrace.core.database import Base


class ActivityType(str, Enum):
    HARVEST = "harvest"
    PACKAGE = "package"
    COOL = "cool"
    SHIP = "ship"
    DELIVER = "deliver"


class LotActivity(Base):
    __tablename__ = "lot_activities"

    id = Column(Integer, primary_key=True, index=True)
    lot_id = Column(Integer, ForeignKey("lots.id"), nullable=False, index=True)
    activity_type = Column(String(20), nullable=False, index=True)
    date_performed = Column(DateTime(timezone=True), nullable=False)
    quantity = Column(Integer, nullable=False)
    operator_name = Column(String(200), nullable=False)
    notes = Column(Text, nullable=True)
    attachments = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    lot = relationship("Lot", back_populates="activities")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_lot_activity_quantity_positive"),
    )
