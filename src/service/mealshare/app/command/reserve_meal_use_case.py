import time
from datetime import datetime
from typing import Callable, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.mealshare_metrics import metrics
from src.service.mealshare.domain.domain_error import (
    CooldownActiveError,
    MealNotFoundError,
    SoldOutError,
)
from src.service.mealshare.domain.entity.reservation_entity import ReservationEntity
from src.service.mealshare.domain.entity.user_entity import UserEntity
from src.service.mealshare.domain.reservation_policy import ReservationPolicy


_OUTCOME_BY_ERROR: dict[type[Exception], str] = {
    ForbiddenError: 'forbidden',
    CooldownActiveError: 'cooldown',
    MealNotFoundError: 'not_found',
    SoldOutError: 'sold_out',
}


class ReserveMealUseCase:
    """
    Reserve one portion of a meal

    Checks, in order (the first failure wins):
    1. role is 'user'                        -> ForbiddenError
    2. no reservation within the cooldown    -> CooldownActiveError
    3. meal exists                           -> MealNotFoundError
    4. a portion is left                     -> SoldOutError
    5. decrement + insert reservation, committed together

    Steps 2-5 share one transaction. The requester's user row is locked first, so
    concurrent attempts by the same user run one after another and the later one
    sees the earlier reservation. The decrement is conditional
    (portions_available > 0), so the counter never goes below zero.
    """

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        reservation_policy: ReservationPolicy,
        clock: Callable[[], datetime],
    ) -> None:
        self.uow_factory = uow_factory
        self.reservation_policy = reservation_policy
        self.clock = clock
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
        reservation_policy: ReservationPolicy = Depends(Provide[Container.reservation_policy]),
        clock: Callable[[], datetime] = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(uow_factory=uow_factory, reservation_policy=reservation_policy, clock=clock)

    @Logger.io
    async def reserve(self, *, user: UserEntity, meal_id: Optional[int]) -> ReservationEntity:
        start_time = time.perf_counter()
        outcome = 'error'

        with self.tracer.start_as_current_span(
            'use_case.reserve_meal',
            attributes={
                'user.id': user.id or 0,
                'user.role': user.role.value,
                'meal.id': meal_id or 0,
            },
        ) as span:
            try:
                reservation = await self._reserve(user=user, meal_id=meal_id)
                outcome = 'created'
                return reservation
            except Exception as e:
                outcome = _OUTCOME_BY_ERROR.get(type(e), 'error')
                raise
            finally:
                span.set_attribute('reservation.outcome', outcome)
                metrics.record_reservation(
                    result=outcome, duration=time.perf_counter() - start_time
                )

    async def _reserve(self, *, user: UserEntity, meal_id: Optional[int]) -> ReservationEntity:
        # 1. Role
        self.reservation_policy.ensure_can_reserve(user)
        if user.id is None:
            raise RuntimeError('Requester identity has no id')

        async with self.uow_factory() as uow:
            await uow.reservation_command_repo.acquire_user_lock(user_id=user.id)

            # 2. Cooldown (evaluated against the latest committed reservation)
            now = self.clock()
            latest = await uow.reservation_query_repo.get_latest_by_user(user_id=user.id)
            self.reservation_policy.ensure_not_cooling_down(latest_reservation=latest, now=now)

            # 3-4. Existence and availability (an unparseable id names no meal)
            meal = (
                await uow.meal_query_repo.get_by_id(meal_id=meal_id)
                if meal_id is not None
                else None
            )
            meal = self.reservation_policy.ensure_available(meal)

            # 5. Commit: conditional decrement and reservation row, one transaction
            if not await uow.meal_command_repo.decrement_portions(meal_id=meal.id):
                raise SoldOutError()

            reservation = await uow.reservation_command_repo.create(
                ReservationEntity(user_id=user.id, meal_id=meal.id, created_at=now)
            )
            await uow.commit()

        Logger.base.info(
            f'🍱 [RESERVE] reservation_id={reservation.id} user_id={user.id} meal_id={meal_id}'
        )
        return reservation
