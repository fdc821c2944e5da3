from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status

from src.platform.config.di import Container
from src.platform.constant.route_constant import USER_LOGIN, USER_REGISTER
from src.platform.logging.loguru_io import Logger
from src.service.mealshare.app.command.register_user_use_case import RegisterUserUseCase
from src.service.mealshare.app.query.login_use_case import LoginUseCase
from src.service.mealshare.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from src.service.mealshare.driving_adapter.http_controller.schema.user_schema import (
    CreateUserRequest,
    LoginRequest,
    LoginResponse,
    UserResponse,
)


# === API Router ===

router = APIRouter()


@router.post(USER_REGISTER, response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def register(
    request: CreateUserRequest,
    use_case: RegisterUserUseCase = Depends(RegisterUserUseCase.depends),
) -> UserResponse:
    user_entity = await use_case.register(
        name=request.name,
        email=request.email,
        password=request.password.get_secret_value(),
        role=request.role,
    )
    return UserResponse.model_validate(user_entity)


@router.post(USER_LOGIN, response_model=LoginResponse)
@Logger.io
@inject
async def login(
    request: LoginRequest,
    use_case: LoginUseCase = Depends(LoginUseCase.depends),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> LoginResponse:
    user_entity = await use_case.authenticate(
        email=request.email,
        password=request.password.get_secret_value(),
    )

    token = jwt_auth.create_jwt_token(user_entity)

    return LoginResponse(
        message='Login successful!',
        token=token,
        user=UserResponse.model_validate(user_entity),
    )
