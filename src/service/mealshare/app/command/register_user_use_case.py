"""
Register User Use Case (Use Case Layer)
"""

from functools import partial
from typing import Optional, Self

import anyio
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from pydantic import SecretStr

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.mealshare_metrics import metrics
from src.service.mealshare.app.interface.i_password_hasher import IPasswordHasher
from src.service.mealshare.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.mealshare.domain.entity.user_entity import UserEntity


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        user_command_repo: IUserCommandRepo,
        password_hasher: IPasswordHasher,
    ) -> None:
        self.user_command_repo = user_command_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(user_command_repo=user_command_repo, password_hasher=password_hasher)

    @Logger.io
    async def register(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: Optional[str] = None,
    ) -> UserEntity:
        UserEntity.validate_registration(name=name, email=email, password=password)
        user_entity = UserEntity(name=name, email=email, role=UserEntity.resolve_role(role))

        # bcrypt is CPU bound; keep it off the event loop
        password_hash = await anyio.to_thread.run_sync(
            partial(self.password_hasher.hash_password, plain_password=SecretStr(password))
        )
        user_entity.set_password_hash(password_hash)

        created_user = await self.user_command_repo.create(user_entity)
        metrics.record_registration(role=created_user.role.value)
        Logger.base.info(f'👤 [REGISTER] user_id={created_user.id} role={created_user.role.value}')
        return created_user
