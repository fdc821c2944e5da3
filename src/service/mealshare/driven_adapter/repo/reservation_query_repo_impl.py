"""
Reservation Query Repository Implementation - CQRS Read Side
"""

from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.mealshare.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.mealshare.domain.entity.reservation_entity import ReservationEntity
from src.service.mealshare.driven_adapter.model.reservation_model import ReservationModel


class ReservationQueryRepoImpl(IReservationQueryRepo):
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
        else:
            raise RuntimeError('No session or session_factory available')

    @Logger.io
    async def get_latest_by_user(self, *, user_id: int) -> Optional[ReservationEntity]:
        async with self._get_session() as session:
            result = await session.execute(
                select(ReservationModel)
                .where(ReservationModel.user_id == user_id)
                .order_by(ReservationModel.created_at.desc(), ReservationModel.id.desc())
                .limit(1)
            )
            reservation_model = result.scalar_one_or_none()

            if not reservation_model:
                return None

            return ReservationEntity(
                id=reservation_model.id,
                user_id=reservation_model.user_id,
                meal_id=reservation_model.meal_id,
                created_at=reservation_model.created_at,
            )
