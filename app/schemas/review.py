from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class ReviewCreate(BaseModel):
    """Star rating with an optional comment. Posting again replaces it."""

    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=2000)

    @field_validator("comment")
    @classmethod
    def normalize_comment(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class ReviewResponse(BaseModel):
    id: UUID
    gym_id: UUID
    user_id: UUID
    reviewer_name: str
    rating: int
    comment: Optional[str] = None
    created_at: datetime
