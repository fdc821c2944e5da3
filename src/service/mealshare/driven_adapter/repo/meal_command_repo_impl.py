"""
Meal Command Repository Implementation - CQRS Write Side

Works standalone (own session per call, committed on success) or inside a unit of
work (shared session, the unit of work commits).
"""

from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.platform.types.utc_datetime import utc_now
from src.service.mealshare.app.interface.i_meal_command_repo import IMealCommandRepo
from src.service.mealshare.domain.entity.meal_entity import MealEntity
from src.service.mealshare.driven_adapter.model.meal_model import MealModel
from src.service.mealshare.driven_adapter.model.user_model import UserModel


class MealCommandRepoImpl(IMealCommandRepo):
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
    async def create(self, meal_entity: MealEntity) -> MealEntity:
        async with self._get_session() as session:
            meal_model = MealModel(
                merchant_id=meal_entity.merchant_id,
                title=meal_entity.title,
                description=meal_entity.description,
                portions_available=meal_entity.portions_available,
                pickup_time=meal_entity.pickup_time,
                created_at=meal_entity.created_at or utc_now(),
            )
            session.add(meal_model)
            await session.flush()

            merchant_name = await session.scalar(
                select(UserModel.name).where(UserModel.id == meal_model.merchant_id)
            )

            return MealEntity(
                id=meal_model.id,
                merchant_id=meal_model.merchant_id,
                title=meal_model.title,
                description=meal_model.description,
                portions_available=meal_model.portions_available,
                pickup_time=meal_model.pickup_time,
                created_at=meal_model.created_at,
                merchant_name=merchant_name,
            )

    @Logger.io
    async def decrement_portions(self, *, meal_id: int) -> bool:
        async with self._get_session() as session:
            result = await session.execute(
                update(MealModel)
                .where(MealModel.id == meal_id, MealModel.portions_available > 0)
                .values(portions_available=MealModel.portions_available - 1)
                .execution_options(synchronize_session=False)
            )
            return result.rowcount == 1
