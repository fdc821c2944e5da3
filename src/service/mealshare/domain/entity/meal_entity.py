from datetime import datetime
from typing import Optional

import attrs

from src.platform.exception.exceptions import InvalidInputError
from src.platform.types.utc_datetime import as_utc


# Largest id a 64-bit INTEGER primary key can hold
MAX_MEAL_ID = 2**63 - 1


@attrs.define
class MealEntity:
    merchant_id: int
    title: str
    portions_available: int
    pickup_time: datetime
    description: str = ''
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    merchant_name: Optional[str] = None  # Filled by catalog reads joined with users

    @classmethod
    def create(
        cls,
        *,
        merchant_id: int,
        title: str,
        portions_available: int,
        pickup_time: datetime,
        description: Optional[str] = None,
    ) -> 'MealEntity':
        if not title.strip() or portions_available < 1:
            raise InvalidInputError('Title, portions and pickup_time are required.')

        return cls(
            merchant_id=merchant_id,
            title=title,
            description=description or '',
            portions_available=portions_available,
            pickup_time=as_utc(pickup_time),
        )

    @staticmethod
    def parse_id(raw: str) -> Optional[int]:
        """Meal id from a path segment; None when no meal can have that id"""
        if not raw.isascii() or not raw.isdigit():
            return None
        meal_id = int(raw)
        return meal_id if 0 < meal_id <= MAX_MEAL_ID else None

    @property
    def is_sold_out(self) -> bool:
        return self.portions_available <= 0
