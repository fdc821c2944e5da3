from datetime import datetime, timedelta, timezone

import pytest

from src.platform.database.db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.mealshare.domain.domain_error import DuplicateEmailError
from src.service.mealshare.domain.entity.meal_entity import MealEntity
from src.service.mealshare.domain.entity.reservation_entity import ReservationEntity
from src.service.mealshare.domain.entity.user_entity import UserEntity, UserRole
from src.service.mealshare.driven_adapter.repo.meal_command_repo_impl import MealCommandRepoImpl
from src.service.mealshare.driven_adapter.repo.meal_query_repo_impl import MealQueryRepoImpl
from src.service.mealshare.driven_adapter.repo.reservation_command_repo_impl import (
    ReservationCommandRepoImpl,
)
from src.service.mealshare.driven_adapter.repo.reservation_query_repo_impl import (
    ReservationQueryRepoImpl,
)
from src.service.mealshare.driven_adapter.repo.user_command_repo_impl import UserCommandRepoImpl
from src.service.mealshare.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl


BASE_TIME = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)


async def _create_user(
    database: Database, *, email: str, role: UserRole = UserRole.USER, name: str = 'Someone'
) -> UserEntity:
    return await UserCommandRepoImpl(database.session).create(
        UserEntity(name=name, email=email, password_hash='$2b$04$hash', role=role)
    )


async def _create_meal(
    database: Database,
    *,
    merchant_id: int,
    title: str = 'Soup',
    portions: int = 3,
    created_at: datetime | None = None,
) -> MealEntity:
    meal = MealEntity.create(
        merchant_id=merchant_id,
        title=title,
        portions_available=portions,
        pickup_time=BASE_TIME + timedelta(days=1),
    )
    meal.created_at = created_at
    return await MealCommandRepoImpl(database.session).create(meal)


@pytest.mark.integration
class TestUserRepos:
    @pytest.mark.asyncio
    async def test_create_and_lookup(self, database: Database):
        created = await _create_user(database, email='ann@test.com', role=UserRole.MERCHANT)
        query_repo = UserQueryRepoImpl(database.session)

        by_email = await query_repo.get_by_email('ann@test.com')
        by_id = await query_repo.get_by_id(created.id)

        assert created.id is not None
        assert created.created_at.tzinfo == timezone.utc
        assert by_email == by_id
        assert by_email.role == UserRole.MERCHANT
        assert await query_repo.get_by_email('nobody@test.com') is None

    @pytest.mark.asyncio
    async def test_duplicate_email_is_rejected(self, database: Database):
        await _create_user(database, email='ann@test.com')

        with pytest.raises(DuplicateEmailError):
            await _create_user(database, email='ann@test.com')


@pytest.mark.integration
class TestMealRepos:
    @pytest.mark.asyncio
    async def test_create_returns_merchant_name(self, database: Database):
        merchant = await _create_user(
            database, email='bistro@test.com', role=UserRole.MERCHANT, name='Green Bistro'
        )

        meal = await _create_meal(database, merchant_id=merchant.id)

        assert meal.id is not None
        assert meal.merchant_name == 'Green Bistro'
        assert meal.description == ''
        assert meal.pickup_time == BASE_TIME + timedelta(days=1)

    @pytest.mark.asyncio
    async def test_list_is_newest_first_with_merchant_name(self, database: Database):
        merchant = await _create_user(
            database, email='bistro@test.com', role=UserRole.MERCHANT, name='Green Bistro'
        )
        await _create_meal(database, merchant_id=merchant.id, title='M1', created_at=BASE_TIME)
        await _create_meal(
            database,
            merchant_id=merchant.id,
            title='M2',
            created_at=BASE_TIME + timedelta(minutes=1),
        )

        meals = await MealQueryRepoImpl(database.session).list_with_merchant()

        assert [meal.title for meal in meals] == ['M2', 'M1']
        assert {meal.merchant_name for meal in meals} == {'Green Bistro'}

    @pytest.mark.asyncio
    async def test_same_timestamp_falls_back_to_newest_id(self, database: Database):
        merchant = await _create_user(database, email='bistro@test.com', role=UserRole.MERCHANT)
        first = await _create_meal(database, merchant_id=merchant.id, created_at=BASE_TIME)
        second = await _create_meal(database, merchant_id=merchant.id, created_at=BASE_TIME)

        meals = await MealQueryRepoImpl(database.session).list_with_merchant()

        assert [meal.id for meal in meals] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_get_by_id_unknown(self, database: Database):
        assert await MealQueryRepoImpl(database.session).get_by_id(meal_id=404) is None

    @pytest.mark.asyncio
    async def test_decrement_stops_at_zero(self, database: Database):
        merchant = await _create_user(database, email='bistro@test.com', role=UserRole.MERCHANT)
        meal = await _create_meal(database, merchant_id=merchant.id, portions=2)
        command_repo = MealCommandRepoImpl(database.session)

        results = [await command_repo.decrement_portions(meal_id=meal.id) for _ in range(3)]

        stored = await MealQueryRepoImpl(database.session).get_by_id(meal_id=meal.id)
        assert results == [True, True, False]
        assert stored.portions_available == 0
        assert stored.is_sold_out

    @pytest.mark.asyncio
    async def test_decrement_unknown_meal(self, database: Database):
        assert not await MealCommandRepoImpl(database.session).decrement_portions(meal_id=404)


@pytest.mark.integration
class TestReservationRepos:
    @pytest.mark.asyncio
    async def test_latest_by_user(self, database: Database):
        merchant = await _create_user(database, email='bistro@test.com', role=UserRole.MERCHANT)
        user = await _create_user(database, email='ann@test.com')
        meal = await _create_meal(database, merchant_id=merchant.id)
        query_repo = ReservationQueryRepoImpl(database.session)

        assert await query_repo.get_latest_by_user(user_id=user.id) is None

        async with SqlAlchemyUnitOfWork(database.session) as uow:
            await uow.reservation_command_repo.acquire_user_lock(user_id=user.id)
            for created_at in (BASE_TIME, BASE_TIME + timedelta(days=4)):
                await uow.reservation_command_repo.create(
                    ReservationEntity(user_id=user.id, meal_id=meal.id, created_at=created_at)
                )
            await uow.commit()

        latest = await query_repo.get_latest_by_user(user_id=user.id)

        assert latest.created_at == BASE_TIME + timedelta(days=4)
        assert latest.meal_id == meal.id

    @pytest.mark.asyncio
    async def test_user_lock_needs_unit_of_work(self, database: Database):
        with pytest.raises(RuntimeError):
            await ReservationCommandRepoImpl(database.session).acquire_user_lock(user_id=1)
