from sqlalchemy import Column, Integer, Time, ForeignKey, Uuid
from .base import BaseModel


class TimeSlot(BaseModel):
    __tablename__ = "time_slots"

    gym_id = Column(Uuid(as_uuid=True), ForeignKey("gyms.id", ondelete="CASCADE"), nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    max_capacity = Column(Integer, nullable=False)
