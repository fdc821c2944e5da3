"""
Reservation Command Repository Implementation - CQRS Write Side
"""

from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.platform.types.utc_datetime import utc_now
from src.service.mealshare.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.mealshare.domain.entity.reservation_entity import ReservationEntity
from src.service.mealshare.driven_adapter.model.reservation_model import ReservationModel
from src.service.mealshare.driven_adapter.model.user_model import UserModel


class ReservationCommandRepoImpl(IReservationCommandRepo):
    def __init__(
        self,
        session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None,
        *,
        session: AsyncSession | None = None,
    ) -> None:
        self.session_factory = session_factory
        self.session = session

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
                await session.commit()
        else:
            raise RuntimeError('No session or session_factory available')

    @Logger.io
    async def acquire_user_lock(self, *, user_id: int) -> None:
        if self.session is None:
            raise RuntimeError('acquire_user_lock requires a unit of work session')

        # PostgreSQL: row lock held until commit/rollback
        # SQLite: FOR UPDATE is not rendered; BEGIN IMMEDIATE already holds the write lock
        await self.session.execute(
            select(UserModel.id).where(UserModel.id == user_id).with_for_update()
        )

    @Logger.io
    async def create(self, reservation_entity: ReservationEntity) -> ReservationEntity:
        async with self._get_session() as session:
            reservation_model = ReservationModel(
                user_id=reservation_entity.user_id,
                meal_id=reservation_entity.meal_id,
                created_at=reservation_entity.created_at or utc_now(),
            )
            session.add(reservation_model)
            await session.flush()

            return ReservationEntity(
                id=reservation_model.id,
                user_id=reservation_model.user_id,
                meal_id=reservation_model.meal_id,
                created_at=reservation_model.created_at,
            )
