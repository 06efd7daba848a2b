from datetime import date, datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.gym import GymSummary


PaymentMethod = Literal["card", "upi", "netbanking"]


class BookingCreate(BaseModel):
    """Schema for booking a session"""

    gym_id: UUID
    booking_date: date
    time_slot_id: Optional[UUID] = None
    payment_method: PaymentMethod = Field(..., description="Please select a payment method")

    class Config:
        json_schema_extra = {
            "example": {
                "gym_id": "0e8f5c4a-3c41-4c3f-9af7-2c8d7db3d6d4",
                "booking_date": "2026-11-02",
                "payment_method": "upi",
            }
        }


class BookingResponse(BaseModel):
    """A booking with the gym it belongs to"""

    id: UUID
    gym_id: UUID
    time_slot_id: Optional[UUID] = None
    booking_date: date
    status: str
    payment_status: str
    payment_method: Optional[str] = None
    amount: float
    created_at: datetime
    gym: Optional[GymSummary] = None

    class Config:
        from_attributes = True
