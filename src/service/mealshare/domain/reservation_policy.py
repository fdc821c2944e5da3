"""
Reservation Policy
Pure admission rules for a reservation request - no storage access
"""

from datetime import datetime, timedelta
from typing import Optional

from src.platform.exception.exceptions import ForbiddenError
from src.service.mealshare.domain.domain_error import (
    CooldownActiveError,
    MealNotFoundError,
    SoldOutError,
)
from src.service.mealshare.domain.entity.meal_entity import MealEntity
from src.service.mealshare.domain.entity.reservation_entity import ReservationEntity
from src.service.mealshare.domain.entity.user_entity import UserEntity, UserRole


class ReservationPolicy:
    """
    Rules are checked in this order by the reserve use case:
    role -> cooldown -> meal exists -> portions left
    """

    def __init__(self, *, cooldown: timedelta) -> None:
        self.cooldown = cooldown

    @staticmethod
    def ensure_can_reserve(user: UserEntity) -> None:
        if not user.has_role(UserRole.USER):
            raise ForbiddenError('Only regular users can reserve meals.')

    def is_cooling_down(
        self, *, latest_reservation: Optional[ReservationEntity], now: datetime
    ) -> bool:
        """Only the most recent reservation counts; one exactly `cooldown` old no longer blocks"""
        if latest_reservation is None or latest_reservation.created_at is None:
            return False
        return now - latest_reservation.created_at < self.cooldown

    def ensure_not_cooling_down(
        self, *, latest_reservation: Optional[ReservationEntity], now: datetime
    ) -> None:
        if self.is_cooling_down(latest_reservation=latest_reservation, now=now):
            raise CooldownActiveError(
                f'You can only reserve one meal every {self.cooldown.days} days.'
            )

    @staticmethod
    def ensure_available(meal: Optional[MealEntity]) -> MealEntity:
        if meal is None:
            raise MealNotFoundError()
        if meal.is_sold_out:
            raise SoldOutError()
        return meal
