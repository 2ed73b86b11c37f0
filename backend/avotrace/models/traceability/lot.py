"""
Lot model and lifecycle enums
"""
from enum import Enum

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from avotrace.core.database import Base


class LotStatus(str, Enum):
    HARVESTED = "harvested"
    PACKAGED = "packaged"
    COOLED = "cooled"
    SHIPPED = "shipped"
    DELIVERED = "delivered"


class Lot(Base):
    __tablename__ = "lots"

    id = Column(Integer, primary_key=True, index=True)
    lot_number = Column(String(20), nullable=False, unique=True, index=True)
    farm_id = Column(Integer, ForeignKey("farms.id"), nullable=False, index=True)
    harvest_date = Column(DateTime(timezone=True), nullable=False)
    initial_quantity = Column(Integer, nullable=False)
    # Derived from the last inserted activity, written only by the lifecycle service
    current_status = Column(String(20), nullable=False, default=LotStatus.HARVESTED.value, index=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    farm = relationship("Farm", back_populates="lots")
    activities = relationship("LotActivity", back_populates="lot", order_by="LotActivity.id")

    __table_args__ = (
        CheckConstraint("initial_quantity > 0", name="ck_lot_initial_quantity_positive"),
    )
