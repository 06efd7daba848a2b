from datetime import datetime, time
from typing import List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator


def _split_amenities(value: Union[str, List[str], None]) -> Optional[List[str]]:
    """Accept "Pool, Sauna" or ["Pool", "Sauna"]; drop blanks."""
    if value is None:
        return None
    items = value.split(",") if isinstance(value, str) else value
    return [item.strip() for item in items if item and item.strip()]


# ============================================================
# Gym Requests
# ============================================================

class GymBase(BaseModel):
    """Shared attributes for listing and editing a gym."""

    name: str = Field(..., min_length=1, max_length=100)
    location: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    price_per_session: float = Field(..., ge=0, description="Price of one session")
    image_url: Optional[str] = Field(None, max_length=500)
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = Field(None, max_length=30)
    amenities: List[str] = Field(default_factory=list)

    @field_validator("name", "location")
    @classmethod
    def normalize_text(cls, value: str) -> str:
        """Trim whitespace and ensure the field is not empty."""
        normalized = " ".join(value.split())
        if not normalized:
            raise ValueError("Field cannot be empty")
        return normalized

    @field_validator("description")
    @classmethod
    def normalize_description(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None

    @field_validator("amenities", mode="before")
    @classmethod
    def split_amenities(cls, value):
        return _split_amenities(value) or []


class GymCreate(GymBase):
    """Schema for listing a new gym."""

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Iron Temple",
                "location": "Indore",
                "description": "Strength and conditioning",
                "price_per_session": 250,
                "contact_email": "desk@irontemple.fit",
                "contact_phone": "+91 90000 00000",
                "amenities": "Showers, Lockers, Parking",
            }
        }


class GymUpdate(BaseModel):
    """Schema for editing a gym; only provided fields change."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    price_per_session: Optional[float] = Field(None, ge=0)
    image_url: Optional[str] = Field(None, max_length=500)
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = Field(None, max_length=30)
    amenities: Optional[List[str]] = None
    is_active: Optional[bool] = None

    @field_validator("name", "location")
    @classmethod
    def normalize_text(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        normalized = " ".join(value.split())
        if not normalized:
            raise ValueError("Field cannot be empty")
        return normalized

    @field_validator("amenities", mode="before")
    @classmethod
    def split_amenities(cls, value):
        return _split_amenities(value)


# ============================================================
# Gym Responses
# ============================================================

class GymResponse(BaseModel):
    """Full gym listing."""

    id: UUID
    owner_id: UUID
    name: str
    location: str
    description: Optional[str] = None
    price_per_session: float
    image_url: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    amenities: List[str] = Field(default_factory=list)
    rating: float
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class GymSummary(BaseModel):
    """Gym fields shown next to a booking."""

    id: UUID
    name: str
    location: str
    price_per_session: float

    class Config:
        from_attributes = True


class OwnedGymResponse(BaseModel):
    """Row of the owner dashboard."""

    id: UUID
    name: str
    location: str
    is_active: bool
    bookings_count: int


# ============================================================
# Trainers
# ============================================================

class TrainerCreate(BaseModel):
    name: str = Field(..., max_length=100)
    speciality: str = Field(..., max_length=100)

    @field_validator("name", "speciality")
    @classmethod
    def require_text(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("Please enter trainer name and speciality")
        return normalized


class TrainerResponse(BaseModel):
    id: UUID
    gym_id: UUID
    name: str
    speciality: str
    created_at: datetime

    class Config:
        from_attributes = True


# ============================================================
# Time Slots
# ============================================================

class TimeSlotCreate(BaseModel):
    """A daily window with a booking cap, e.g. 06:00-07:30 for 20 people."""

    start_time: time
    end_time: time
    max_capacity: int = Field(..., ge=1, description="Capacity must be at least 1")

    @model_validator(mode="after")
    def check_window(self):
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self


class TimeSlotResponse(BaseModel):
    id: UUID
    gym_id: UUID
    start_time: time
    end_time: time
    max_capacity: int

    class Config:
        from_attributes = True


# ============================================================
# Booking analytics
# ============================================================

class StatusCount(BaseModel):
    status: str
    count: int


class GymStatsResponse(BaseModel):
    """Booking analytics for one gym."""

    gym_id: UUID
    name: str
    location: str
    total_bookings: int
    today_bookings: int
    week_bookings: int
    total_revenue: float
    status_breakdown: List[StatusCount]
