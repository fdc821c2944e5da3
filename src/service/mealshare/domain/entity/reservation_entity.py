from datetime import datetime
from typing import Optional

import attrs


@attrs.define
class ReservationEntity:
    user_id: int
    meal_id: int
    id: Optional[int] = None
    created_at: Optional[datetime] = None
