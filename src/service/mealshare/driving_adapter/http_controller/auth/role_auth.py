from typing import Awaitable, Callable, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.service.mealshare.domain.entity.user_entity import UserEntity, UserRole
from src.service.mealshare.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


bearer_scheme = HTTPBearer(auto_error=False)


@inject
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> UserEntity:
    """Identity from the Authorization: Bearer header (stateless, no DB query)"""
    token = credentials.credentials if credentials else None
    return jwt_auth.get_current_user_info_from_jwt(token)


def require_roles(*allowed: UserRole, message: str) -> Callable[..., Awaitable[UserEntity]]:
    """Build a dependency that admits only users whose role is in `allowed`"""

    async def dependency(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
        tracer = trace.get_tracer(__name__)
        with tracer.start_as_current_span(
            'auth.require_roles',
            attributes={
                'user.id': current_user.id or 0,
                'user.role': current_user.role.value,
                'auth.allowed_roles': [role.value for role in allowed],
            },
        ):
            if not current_user.has_role(*allowed):
                raise ForbiddenError(message)
            return current_user

    return dependency


require_user = require_roles(UserRole.USER, message='Only regular users can reserve meals.')
require_merchant = require_roles(UserRole.MERCHANT, message='Only merchants can create meals.')
