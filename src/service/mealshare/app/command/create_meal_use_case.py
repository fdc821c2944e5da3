from datetime import datetime
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.mealshare_metrics import metrics
from src.service.mealshare.app.interface.i_meal_command_repo import IMealCommandRepo
from src.service.mealshare.domain.entity.meal_entity import MealEntity
from src.service.mealshare.domain.entity.user_entity import UserEntity


class CreateMealUseCase:
    def __init__(self, *, meal_command_repo: IMealCommandRepo) -> None:
        self.meal_command_repo = meal_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        meal_command_repo: IMealCommandRepo = Depends(Provide[Container.meal_command_repo]),
    ) -> Self:
        return cls(meal_command_repo=meal_command_repo)

    @Logger.io
    async def create(
        self,
        *,
        merchant: UserEntity,
        title: str,
        portions_available: int,
        pickup_time: datetime,
        description: Optional[str] = None,
    ) -> MealEntity:
        if merchant.id is None:
            raise RuntimeError('Merchant identity has no id')

        meal_entity = MealEntity.create(
            merchant_id=merchant.id,
            title=title,
            description=description,
            portions_available=portions_available,
            pickup_time=pickup_time,
        )
        created_meal = await self.meal_command_repo.create(meal_entity)
        metrics.record_meal_created()
        return created_meal
