"""
Login Use Case (Use Case Layer)
"""

from functools import partial
from typing import Self

import anyio
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from pydantic import SecretStr

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.mealshare_metrics import metrics
from src.service.mealshare.app.interface.i_password_hasher import IPasswordHasher
from src.service.mealshare.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.mealshare.domain.domain_error import InvalidCredentialsError, UserNotFoundError
from src.service.mealshare.domain.entity.user_entity import UserEntity


class LoginUseCase:
    def __init__(
        self,
        *,
        user_query_repo: IUserQueryRepo,
        password_hasher: IPasswordHasher,
    ) -> None:
        self.user_query_repo = user_query_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(user_query_repo=user_query_repo, password_hasher=password_hasher)

    @Logger.io
    async def authenticate(self, *, email: str, password: str) -> UserEntity:
        user_entity = await self.user_query_repo.get_by_email(email)
        if user_entity is None:
            metrics.record_login(result='user_not_found')
            raise UserNotFoundError()

        matched = await anyio.to_thread.run_sync(
            partial(
                self.password_hasher.verify_password,
                plain_password=SecretStr(password),
                hashed_password=user_entity.password_hash,
            )
        )
        if not matched:
            metrics.record_login(result='invalid_credentials')
            raise InvalidCredentialsError()

        metrics.record_login(result='success')
        return user_entity
