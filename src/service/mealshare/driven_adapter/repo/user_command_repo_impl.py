from typing import AsyncContextManager, Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.platform.types.utc_datetime import utc_now
from src.service.mealshare.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.mealshare.domain.domain_error import DuplicateEmailError
from src.service.mealshare.domain.entity.user_entity import UserEntity, UserRole
from src.service.mealshare.driven_adapter.model.user_model import UserModel


class UserCommandRepoImpl(IUserCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, user_entity: UserEntity) -> UserEntity:
        async with self.session_factory() as session:
            user_model = UserModel(
                name=user_entity.name,
                email=user_entity.email,
                password_hash=user_entity.password_hash,
                role=user_entity.role.value,
                created_at=user_entity.created_at or utc_now(),
            )

            session.add(user_model)
            try:
                await session.commit()
            except IntegrityError as e:
                # Only the unique email index can reject a well-formed user row
                raise DuplicateEmailError() from e

            return self._model_to_entity(user_model)

    def _model_to_entity(self, user_model: UserModel) -> UserEntity:
        return UserEntity(
            id=user_model.id,
            name=user_model.name,
            email=user_model.email,
            password_hash=user_model.password_hash,
            role=UserRole(user_model.role),
            created_at=user_model.created_at,
        )
