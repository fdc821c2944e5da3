"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from datetime import timedelta

from dependency_injector import containers, providers

from src.platform.config.core_setting import settings
from src.platform.database.db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.types.utc_datetime import utc_now
from src.service.mealshare.domain.reservation_policy import ReservationPolicy
from src.service.mealshare.driven_adapter.repo.meal_command_repo_impl import MealCommandRepoImpl
from src.service.mealshare.driven_adapter.repo.meal_query_repo_impl import MealQueryRepoImpl
from src.service.mealshare.driven_adapter.repo.user_command_repo_impl import UserCommandRepoImpl
from src.service.mealshare.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.mealshare.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.mealshare.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Database (engine created lazily, disposed by the app lifespan)
    database = providers.Singleton(Database)

    # Clock used for reservation timestamps and the cooldown window
    clock = providers.Object(utc_now)

    # Repositories (stateless - use session_factory per call)
    user_command_repo = providers.Singleton(
        UserCommandRepoImpl, session_factory=database.provided.session
    )
    user_query_repo = providers.Singleton(
        UserQueryRepoImpl, session_factory=database.provided.session
    )
    meal_command_repo = providers.Singleton(
        MealCommandRepoImpl, session_factory=database.provided.session
    )
    meal_query_repo = providers.Singleton(
        MealQueryRepoImpl, session_factory=database.provided.session
    )

    # Unit of Work (one transaction per reservation attempt)
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session
    )

    # Domain policy
    reservation_policy = providers.Singleton(
        ReservationPolicy,
        cooldown=providers.Factory(timedelta, days=settings.RESERVATION_COOLDOWN_DAYS),
    )

    # Auth services
    jwt_auth = providers.Singleton(JwtAuth)
    password_hasher = providers.Singleton(BcryptPasswordHasher)


container = Container()


def cleanup() -> None:
    container.reset_singletons()
