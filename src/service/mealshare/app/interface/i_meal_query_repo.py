from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.mealshare.domain.entity.meal_entity import MealEntity


class IMealQueryRepo(ABC):
    """Meal Query Repository Abstract Interface - Handles read operations"""

    @abstractmethod
    async def get_by_id(self, *, meal_id: int) -> Optional[MealEntity]:
        pass

    @abstractmethod
    async def list_with_merchant(self) -> List[MealEntity]:
        """All meals with merchant_name, newest first (created_at DESC, id DESC)"""
        pass
