"""
Booking Model

One booked session at a gym on a given day, optionally inside one of the
gym's time slots. Cancelling keeps the row with status="cancelled".
"""

from sqlalchemy import Column, String, Date, Numeric, ForeignKey, Index, Uuid
from .base import BaseModel


class Booking(BaseModel):
    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_gym_date", "gym_id", "booking_date"),
    )

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    gym_id = Column(Uuid(as_uuid=True), ForeignKey("gyms.id", ondelete="CASCADE"), nullable=False)
    time_slot_id = Column(Uuid(as_uuid=True), ForeignKey("time_slots.id", ondelete="SET NULL"), nullable=True)
    booking_date = Column(Date, nullable=False)

    # confirmed | cancelled
    status = Column(String(20), default="confirmed", nullable=False)
    # pending | paid
    payment_status = Column(String(20), default="pending", nullable=False)
    payment_method = Column(String(20), nullable=True)
    amount = Column(Numeric(10, 2, asdecimal=False), nullable=False)
