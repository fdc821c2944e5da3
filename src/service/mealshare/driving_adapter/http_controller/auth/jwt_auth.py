"""
Bearer token issuing and verification (stateless, no revocation)
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from src.platform.config.core_setting import settings
from src.service.mealshare.domain.domain_error import InvalidTokenError, MissingTokenError
from src.service.mealshare.domain.entity.user_entity import UserEntity, UserRole


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire_days = settings.ACCESS_TOKEN_EXPIRE_DAYS

    def create_jwt_token(self, user_entity: UserEntity, *, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            'sub': str(user_entity.id),
            'id': user_entity.id,
            'email': user_entity.email,
            'role': user_entity.role.value,
            'iat': issued_at,
            'exp': issued_at + timedelta(days=self.token_expire_days),
        }

        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={'require': ['exp', 'iat', 'sub']},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError() from e

    def get_current_user_info_from_jwt(self, token: Optional[str]) -> UserEntity:
        if not token:
            raise MissingTokenError()

        payload = self.decode_jwt_token(token)

        user_id = payload.get('id')
        email = payload.get('email')
        role = payload.get('role')

        valid_roles = {r.value for r in UserRole}
        if not isinstance(user_id, int) or not email or role not in valid_roles:
            raise InvalidTokenError()

        # Rebuild UserEntity from JWT payload (no DB query)
        return UserEntity(id=user_id, email=email, role=UserRole(role))
