from datetime import datetime
from enum import Enum
from typing import Optional

import attrs

from src.platform.exception.exceptions import InvalidInputError


class UserRole(str, Enum):
    USER = 'user'
    MERCHANT = 'merchant'


@attrs.define
class UserEntity:
    email: str = ''
    name: str = ''
    password_hash: str = attrs.field(default='', repr=False)  # Hide from repr for security
    id: Optional[int] = None
    role: UserRole = UserRole.USER
    created_at: Optional[datetime] = None

    @staticmethod
    def resolve_role(role: Optional[str]) -> UserRole:
        """Only an exact 'merchant' grants the merchant role; anything else is a regular user"""
        return UserRole.MERCHANT if role == UserRole.MERCHANT.value else UserRole.USER

    @staticmethod
    def validate_registration(*, name: str, email: str, password: str) -> None:
        if not name.strip() or not email.strip() or not password.strip():
            raise InvalidInputError('Name, email and password are required.')

    def has_role(self, *roles: UserRole) -> bool:
        return self.role in roles

    def set_password_hash(self, password_hash: str) -> None:
        self.password_hash = password_hash
