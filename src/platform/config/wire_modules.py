"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.mealshare.app.command import (
    create_meal_use_case,
    register_user_use_case,
    reserve_meal_use_case,
)
from src.service.mealshare.app.query import (
    get_meal_use_case,
    list_meals_use_case,
    login_use_case,
)
from src.service.mealshare.driving_adapter.http_controller import (
    meal_controller,
    user_controller,
)
from src.service.mealshare.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    register_user_use_case,
    create_meal_use_case,
    reserve_meal_use_case,
    login_use_case,
    list_meals_use_case,
    get_meal_use_case,
    user_controller,
    meal_controller,
    role_auth,
]
