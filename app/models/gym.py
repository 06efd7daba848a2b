from sqlalchemy import Column, String, Boolean, Float, Numeric, ForeignKey, Text, JSON, Uuid
from .base import BaseModel


class Gym(BaseModel):
    __tablename__ = "gyms"

    owner_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    location = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    price_per_session = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    image_url = Column(String(500), nullable=True)
    contact_email = Column(String(255), nullable=True)
    contact_phone = Column(String(30), nullable=True)
    amenities = Column(JSON, default=list, nullable=False)
    # New listings start at 4.0 until the first review arrives
    rating = Column(Float, default=4.0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
