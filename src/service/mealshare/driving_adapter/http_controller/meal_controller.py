from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.constant.route_constant import (
    MEAL_CREATE,
    MEAL_GET,
    MEAL_LIST,
    MEAL_RESERVE,
)
from src.platform.logging.loguru_io import Logger
from src.service.mealshare.app.command.create_meal_use_case import CreateMealUseCase
from src.service.mealshare.app.command.reserve_meal_use_case import ReserveMealUseCase
from src.service.mealshare.app.query.get_meal_use_case import GetMealUseCase
from src.service.mealshare.app.query.list_meals_use_case import ListMealsUseCase
from src.service.mealshare.domain.entity.meal_entity import MealEntity
from src.service.mealshare.domain.entity.user_entity import UserEntity
from src.service.mealshare.driving_adapter.http_controller.auth.role_auth import (
    require_merchant,
    require_user,
)
from src.service.mealshare.driving_adapter.http_controller.schema.meal_schema import (
    MealCreateRequest,
    MealResponse,
)
from src.service.mealshare.driving_adapter.http_controller.schema.reservation_schema import (
    ReservationResponse,
    ReserveMealResponse,
)


router = APIRouter()


@router.post(MEAL_CREATE, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_meal(
    request: MealCreateRequest,
    current_user: UserEntity = Depends(require_merchant),
    use_case: CreateMealUseCase = Depends(CreateMealUseCase.depends),
) -> MealResponse:
    meal = await use_case.create(
        merchant=current_user,
        title=request.title,
        description=request.description,
        portions_available=request.portions_available,
        pickup_time=request.pickup_time,
    )
    return MealResponse.model_validate(meal)


@router.get(MEAL_LIST, status_code=status.HTTP_200_OK)
@Logger.io
async def list_meals(
    use_case: ListMealsUseCase = Depends(ListMealsUseCase.depends),
) -> List[MealResponse]:
    meals = await use_case.list_meals()
    return [MealResponse.model_validate(meal) for meal in meals]


@router.get(MEAL_GET, status_code=status.HTTP_200_OK)
@Logger.io
async def get_meal(
    meal_id: str,
    use_case: GetMealUseCase = Depends(GetMealUseCase.depends),
) -> MealResponse:
    meal = await use_case.get_meal(meal_id=MealEntity.parse_id(meal_id))
    return MealResponse.model_validate(meal)


@router.post(MEAL_RESERVE, status_code=status.HTTP_201_CREATED)
@Logger.io
async def reserve_meal(
    meal_id: str,
    current_user: UserEntity = Depends(require_user),
    use_case: ReserveMealUseCase = Depends(ReserveMealUseCase.depends),
) -> ReserveMealResponse:
    reservation = await use_case.reserve(user=current_user, meal_id=MealEntity.parse_id(meal_id))
    return ReserveMealResponse(
        message='Reservation created successfully.',
        reservation=ReservationResponse.model_validate(reservation),
    )
