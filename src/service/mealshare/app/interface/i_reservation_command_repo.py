from abc import ABC, abstractmethod

from src.service.mealshare.domain.entity.reservation_entity import ReservationEntity


class IReservationCommandRepo(ABC):
    """Reservation Command Repository Abstract Interface - Handles write operations"""

    @abstractmethod
    async def acquire_user_lock(self, *, user_id: int) -> None:
        """
        Serialize reservation attempts of one user until the transaction ends.

        Must be called inside a unit of work before reading the user's latest
        reservation.
        """
        pass

    @abstractmethod
    async def create(self, reservation_entity: ReservationEntity) -> ReservationEntity:
        pass
