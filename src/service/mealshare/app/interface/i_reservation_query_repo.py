from abc import ABC, abstractmethod
from typing import Optional

from src.service.mealshare.domain.entity.reservation_entity import ReservationEntity


class IReservationQueryRepo(ABC):
    """Reservation Query Repository Abstract Interface - Handles read operations"""

    @abstractmethod
    async def get_latest_by_user(self, *, user_id: int) -> Optional[ReservationEntity]:
        pass
