from sqlalchemy import Column, ForeignKey, UniqueConstraint, Uuid
from .base import BaseModel


class Favorite(BaseModel):
    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("user_id", "gym_id", name="uq_favorites_user_gym"),
    )

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    gym_id = Column(Uuid(as_uuid=True), ForeignKey("gyms.id", ondelete="CASCADE"), nullable=False)
