from sqlalchemy import Column, String, ForeignKey, Uuid
from .base import BaseModel


class Trainer(BaseModel):
    __tablename__ = "trainers"

    gym_id = Column(Uuid(as_uuid=True), ForeignKey("gyms.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    speciality = Column(String(100), nullable=False)
