from abc import ABC, abstractmethod

from src.service.mealshare.domain.entity.user_entity import UserEntity


class IUserCommandRepo(ABC):
    """User Command Repository Abstract Interface - Handles write operations"""

    @abstractmethod
    async def create(self, user_entity: UserEntity) -> UserEntity:
        """Insert a user; a taken email raises DuplicateEmailError"""
        pass
