from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MealCreateRequest(BaseModel):
    title: str = Field(..., max_length=255)
    description: Optional[str] = None
    portions_available: int
    pickup_time: datetime

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'title': 'Vegetable lasagna',
                'description': 'Leftover trays from lunch service',
                'portions_available': 5,
                'pickup_time': '2025-01-01T19:00:00Z',
            }
        }
    )


class MealResponse(BaseModel):
    id: int
    merchant_id: int
    title: str
    description: str
    portions_available: int
    pickup_time: datetime
    created_at: Optional[datetime] = None
    merchant_name: Optional[str] = None

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            'example': {
                'id': 1,
                'merchant_id': 1,
                'title': 'Vegetable lasagna',
                'description': 'Leftover trays from lunch service',
                'portions_available': 5,
                'pickup_time': '2025-01-01T19:00:00Z',
                'created_at': '2025-01-01T12:00:00Z',
                'merchant_name': 'Green Bistro',
            }
        },
    )
