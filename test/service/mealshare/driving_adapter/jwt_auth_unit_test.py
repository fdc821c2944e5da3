from datetime import datetime, timedelta, timezone

import jwt
import pytest

from src.platform.config.core_setting import settings
from src.service.mealshare.domain.domain_error import InvalidTokenError, MissingTokenError
from src.service.mealshare.domain.entity.user_entity import UserEntity, UserRole
from src.service.mealshare.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


MERCHANT = UserEntity(id=5, name='Bistro', email='bistro@test.com', role=UserRole.MERCHANT)


@pytest.fixture
def jwt_auth() -> JwtAuth:
    return JwtAuth()


@pytest.mark.unit
class TestJwtAuth:
    def test_token_carries_identity_and_expiry(self, jwt_auth: JwtAuth):
        issued_at = datetime.now(timezone.utc).replace(microsecond=0)

        token = jwt_auth.create_jwt_token(MERCHANT, now=issued_at)
        payload = jwt_auth.decode_jwt_token(token)

        assert payload['sub'] == '5'
        assert payload['id'] == 5
        assert payload['email'] == 'bistro@test.com'
        assert payload['role'] == 'merchant'
        assert payload['exp'] - payload['iat'] == int(
            timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS).total_seconds()
        )

    def test_identity_is_rebuilt_from_token(self, jwt_auth: JwtAuth):
        token = jwt_auth.create_jwt_token(MERCHANT)

        user = jwt_auth.get_current_user_info_from_jwt(token)

        assert user.id == 5
        assert user.email == 'bistro@test.com'
        assert user.role == UserRole.MERCHANT

    @pytest.mark.parametrize('token', [None, ''])
    def test_missing_token(self, jwt_auth: JwtAuth, token):
        with pytest.raises(MissingTokenError) as exc_info:
            jwt_auth.get_current_user_info_from_jwt(token)

        assert exc_info.value.status_code == 401

    def test_garbage_token(self, jwt_auth: JwtAuth):
        with pytest.raises(InvalidTokenError) as exc_info:
            jwt_auth.get_current_user_info_from_jwt('not-a-jwt')

        assert exc_info.value.status_code == 403

    def test_token_signed_with_other_secret(self, jwt_auth: JwtAuth):
        now = datetime.now(timezone.utc)
        forged = jwt.encode(
            {
                'sub': '5',
                'id': 5,
                'email': 'bistro@test.com',
                'role': 'merchant',
                'iat': now,
                'exp': now + timedelta(days=1),
            },
            'some-other-secret-that-is-long-enough-for-hs256',
            algorithm='HS256',
        )

        with pytest.raises(InvalidTokenError):
            jwt_auth.get_current_user_info_from_jwt(forged)

    def test_expired_token(self, jwt_auth: JwtAuth):
        long_ago = datetime.now(timezone.utc) - timedelta(days=30)
        token = jwt_auth.create_jwt_token(MERCHANT, now=long_ago)

        with pytest.raises(InvalidTokenError):
            jwt_auth.get_current_user_info_from_jwt(token)

    def test_unknown_role_in_token(self, jwt_auth: JwtAuth):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {
                'sub': '5',
                'id': 5,
                'email': 'bistro@test.com',
                'role': 'admin',
                'iat': now,
                'exp': now + timedelta(days=1),
            },
            settings.SECRET_KEY.get_secret_value(),
            algorithm=settings.ALGORITHM,
        )

        with pytest.raises(InvalidTokenError):
            jwt_auth.get_current_user_info_from_jwt(token)
