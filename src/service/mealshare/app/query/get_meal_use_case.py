from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.mealshare.app.interface.i_meal_query_repo import IMealQueryRepo
from src.service.mealshare.domain.domain_error import MealNotFoundError
from src.service.mealshare.domain.entity.meal_entity import MealEntity


class GetMealUseCase:
    def __init__(self, *, meal_query_repo: IMealQueryRepo) -> None:
        self.meal_query_repo = meal_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        meal_query_repo: IMealQueryRepo = Depends(Provide[Container.meal_query_repo]),
    ) -> Self:
        return cls(meal_query_repo=meal_query_repo)

    @Logger.io
    async def get_meal(self, *, meal_id: Optional[int]) -> MealEntity:
        if meal_id is None:
            raise MealNotFoundError()

        meal = await self.meal_query_repo.get_by_id(meal_id=meal_id)
        if meal is None:
            raise MealNotFoundError()
        return meal
