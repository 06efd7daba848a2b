from uuid import UUID

from pydantic import BaseModel


class FavoriteToggleResponse(BaseModel):
    """State of the heart icon after a toggle"""

    gym_id: UUID
    is_favorite: bool
