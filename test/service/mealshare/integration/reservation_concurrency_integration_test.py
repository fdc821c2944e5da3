"""
Concurrent reservation attempts against a real SQLite file

Many attempts race for few portions; the conditional decrement and the per-user
lock must keep the counter and the cooldown consistent.
"""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from src.platform.database.db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.types.utc_datetime import utc_now
from src.service.mealshare.app.command.reserve_meal_use_case import ReserveMealUseCase
from src.service.mealshare.domain.domain_error import CooldownActiveError, SoldOutError
from src.service.mealshare.domain.entity.meal_entity import MealEntity
from src.service.mealshare.domain.entity.reservation_entity import ReservationEntity
from src.service.mealshare.domain.entity.user_entity import UserEntity, UserRole
from src.service.mealshare.domain.reservation_policy import ReservationPolicy
from src.service.mealshare.driven_adapter.repo.meal_command_repo_impl import MealCommandRepoImpl
from src.service.mealshare.driven_adapter.repo.meal_query_repo_impl import MealQueryRepoImpl
from src.service.mealshare.driven_adapter.repo.user_command_repo_impl import UserCommandRepoImpl


@pytest.fixture
def reserve_meal_use_case(database: Database) -> ReserveMealUseCase:
    return ReserveMealUseCase(
        uow_factory=lambda: SqlAlchemyUnitOfWork(database.session),
        reservation_policy=ReservationPolicy(cooldown=timedelta(days=3)),
        clock=utc_now,
    )


async def _create_users(database: Database, count: int) -> list[UserEntity]:
    repo = UserCommandRepoImpl(database.session)
    return [
        await repo.create(
            UserEntity(name=f'User {i}', email=f'user{i}@test.com', password_hash='$2b$04$x')
        )
        for i in range(count)
    ]


async def _create_meal(database: Database, *, portions: int) -> MealEntity:
    merchant = await UserCommandRepoImpl(database.session).create(
        UserEntity(
            name='Green Bistro',
            email='merchant@test.com',
            password_hash='$2b$04$x',
            role=UserRole.MERCHANT,
        )
    )
    return await MealCommandRepoImpl(database.session).create(
        MealEntity.create(
            merchant_id=merchant.id,
            title='Soup',
            portions_available=portions,
            pickup_time=datetime(2030, 1, 1, 19, 0, tzinfo=timezone.utc),
        )
    )


def _split(results: list) -> tuple[list[ReservationEntity], list[BaseException]]:
    successes = [r for r in results if isinstance(r, ReservationEntity)]
    failures = [r for r in results if isinstance(r, BaseException)]
    return successes, failures


@pytest.mark.integration
class TestConcurrentReservations:
    @pytest.mark.asyncio
    async def test_ten_users_three_portions(
        self, database: Database, reserve_meal_use_case: ReserveMealUseCase
    ):
        users = await _create_users(database, 10)
        meal = await _create_meal(database, portions=3)

        results = await asyncio.gather(
            *(reserve_meal_use_case.reserve(user=user, meal_id=meal.id) for user in users),
            return_exceptions=True,
        )

        successes, failures = _split(results)
        assert len(successes) == 3
        assert len(failures) == 7
        assert all(isinstance(failure, SoldOutError) for failure in failures)
        assert len({reservation.user_id for reservation in successes}) == 3

        stored = await MealQueryRepoImpl(database.session).get_by_id(meal_id=meal.id)
        assert stored.portions_available == 0

    @pytest.mark.asyncio
    async def test_same_user_racing_gets_one_reservation(
        self, database: Database, reserve_meal_use_case: ReserveMealUseCase
    ):
        [user] = await _create_users(database, 1)
        meal = await _create_meal(database, portions=5)

        results = await asyncio.gather(
            *(reserve_meal_use_case.reserve(user=user, meal_id=meal.id) for _ in range(5)),
            return_exceptions=True,
        )

        successes, failures = _split(results)
        assert len(successes) == 1
        assert len(failures) == 4
        assert all(isinstance(failure, CooldownActiveError) for failure in failures)

        stored = await MealQueryRepoImpl(database.session).get_by_id(meal_id=meal.id)
        assert stored.portions_available == 4
