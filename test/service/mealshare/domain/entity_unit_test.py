from datetime import datetime, timedelta, timezone

import pytest

from src.platform.exception.exceptions import InvalidInputError
from src.service.mealshare.domain.entity.meal_entity import MealEntity
from src.service.mealshare.domain.entity.user_entity import UserEntity, UserRole


@pytest.mark.unit
class TestUserEntity:
    @pytest.mark.parametrize(
        'requested, expected',
        [
            ('merchant', UserRole.MERCHANT),
            ('user', UserRole.USER),
            (None, UserRole.USER),
            ('Merchant', UserRole.USER),
            ('admin', UserRole.USER),
        ],
    )
    def test_role_is_merchant_only_when_exactly_requested(self, requested, expected):
        assert UserEntity.resolve_role(requested) == expected

    @pytest.mark.parametrize(
        'name, email, password',
        [('', 'a@b.c', 'pw'), ('Ann', '  ', 'pw'), ('Ann', 'a@b.c', '')],
    )
    def test_registration_requires_name_email_password(self, name, email, password):
        with pytest.raises(InvalidInputError) as exc_info:
            UserEntity.validate_registration(name=name, email=email, password=password)

        assert exc_info.value.code == 'VALIDATION_ERROR'

    def test_password_hash_hidden_from_repr(self):
        user = UserEntity(id=1, email='a@b.c', name='Ann', password_hash='$2b$secret')

        assert '$2b$secret' not in repr(user)


@pytest.mark.unit
class TestMealEntity:
    def test_create_defaults_description_and_normalises_pickup_time(self):
        naive_pickup = datetime(2030, 1, 1, 19, 0, 0)

        meal = MealEntity.create(
            merchant_id=1, title='Soup', portions_available=3, pickup_time=naive_pickup
        )

        assert meal.description == ''
        assert meal.pickup_time == naive_pickup.replace(tzinfo=timezone.utc)
        assert meal.id is None

    def test_create_converts_offset_pickup_time_to_utc(self):
        taipei = timezone(timedelta(hours=8))

        meal = MealEntity.create(
            merchant_id=1,
            title='Soup',
            portions_available=3,
            pickup_time=datetime(2030, 1, 2, 3, 0, 0, tzinfo=taipei),
        )

        assert meal.pickup_time == datetime(2030, 1, 1, 19, 0, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize('title, portions', [('   ', 3), ('Soup', 0), ('Soup', -1)])
    def test_create_rejects_blank_title_or_no_portions(self, title, portions):
        with pytest.raises(InvalidInputError):
            MealEntity.create(
                merchant_id=1,
                title=title,
                portions_available=portions,
                pickup_time=datetime(2030, 1, 1, tzinfo=timezone.utc),
            )

    def test_sold_out_when_no_portion_left(self):
        meal = MealEntity(
            merchant_id=1,
            title='Soup',
            portions_available=0,
            pickup_time=datetime(2030, 1, 1, tzinfo=timezone.utc),
        )

        assert meal.is_sold_out is True

    @pytest.mark.parametrize(
        'raw, expected', [('1', 1), ('42', 42), ('9223372036854775807', 2**63 - 1)]
    )
    def test_parse_id_accepts_positive_integers(self, raw: str, expected: int):
        assert MealEntity.parse_id(raw) == expected

    @pytest.mark.parametrize(
        'raw', ['abc', '', '0', '-1', '+3', '1.5', ' 7', '١٢', '9223372036854775808']
    )
    def test_parse_id_rejects_anything_no_meal_can_have(self, raw: str):
        assert MealEntity.parse_id(raw) is None
