"""
Meal Query Repository Implementation - CQRS Read Side
"""

from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.mealshare.app.interface.i_meal_query_repo import IMealQueryRepo
from src.service.mealshare.domain.entity.meal_entity import MealEntity
from src.service.mealshare.driven_adapter.model.meal_model import MealModel
from src.service.mealshare.driven_adapter.model.user_model import UserModel


class MealQueryRepoImpl(IMealQueryRepo):
    """Meal Query Repository Implementation - CQRS Read Side"""

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

    @staticmethod
    def _select_with_merchant() -> Select:
        return select(MealModel, UserModel.name).join(
            UserModel, MealModel.merchant_id == UserModel.id
        )

    @staticmethod
    def _row_to_entity(meal_model: MealModel, merchant_name: Optional[str]) -> MealEntity:
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
    async def get_by_id(self, *, meal_id: int) -> Optional[MealEntity]:
        async with self._get_session() as session:
            result = await session.execute(
                self._select_with_merchant().where(MealModel.id == meal_id)
            )
            row = result.one_or_none()

            if row is None:
                return None

            meal_model, merchant_name = row
            return self._row_to_entity(meal_model, merchant_name)

    @Logger.io
    async def list_with_merchant(self) -> List[MealEntity]:
        async with self._get_session() as session:
            result = await session.execute(
                self._select_with_merchant().order_by(
                    MealModel.created_at.desc(), MealModel.id.desc()
                )
            )
            return [
                self._row_to_entity(meal_model, merchant_name)
                for meal_model, merchant_name in result.all()
            ]
