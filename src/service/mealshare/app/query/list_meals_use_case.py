from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.mealshare.app.interface.i_meal_query_repo import IMealQueryRepo
from src.service.mealshare.domain.entity.meal_entity import MealEntity


class ListMealsUseCase:
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
    async def list_meals(self) -> List[MealEntity]:
        return await self.meal_query_repo.list_with_merchant()
