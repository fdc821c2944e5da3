from abc import ABC, abstractmethod

from src.service.mealshare.domain.entity.meal_entity import MealEntity


class IMealCommandRepo(ABC):
    """Meal Command Repository Abstract Interface - Handles write operations"""

    @abstractmethod
    async def create(self, meal_entity: MealEntity) -> MealEntity:
        pass

    @abstractmethod
    async def decrement_portions(self, *, meal_id: int) -> bool:
        """
        Take one portion if any is left.

        Atomic conditional update; returns False when the meal has no portion left
        (or does not exist) and nothing was changed.
        """
        pass
