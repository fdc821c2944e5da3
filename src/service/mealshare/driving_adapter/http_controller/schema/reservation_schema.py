from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ReservationResponse(BaseModel):
    id: int
    user_id: int
    meal_id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ReserveMealResponse(BaseModel):
    message: str
    reservation: ReservationResponse

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'message': 'Reservation created successfully.',
                'reservation': {
                    'id': 1,
                    'user_id': 2,
                    'meal_id': 1,
                    'created_at': '2025-01-01T12:30:00Z',
                },
            }
        }
    )
