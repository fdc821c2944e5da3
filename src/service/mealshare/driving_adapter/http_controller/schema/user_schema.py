"""
User API Schemas - Pydantic models for request/response
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from src.service.mealshare.domain.entity.user_entity import UserRole


# bcrypt only reads the first 72 bytes of its input
BCRYPT_MAX_PASSWORD_BYTES = 72


def _check_password_bytes(password: SecretStr) -> SecretStr:
    if len(password.get_secret_value().encode('utf-8')) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValueError(f'Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes (UTF-8)')
    return password


class CreateUserRequest(BaseModel):
    """Register request schema (blank values are rejected by the use case)"""

    name: str = Field(..., max_length=255)
    email: str = Field(..., max_length=255)
    password: SecretStr = Field(
        ..., max_length=72, description='Password (max 72 bytes as UTF-8, bcrypt limit)'
    )
    role: Optional[str] = Field(
        default=None, description="'merchant' for a merchant account, anything else is a user"
    )

    @field_validator('password')
    @classmethod
    def check_password_bytes(cls, password: SecretStr) -> SecretStr:
        return _check_password_bytes(password)

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'name': 'Green Bistro',
                'email': 'bistro@example.com',
                'password': 'P@ssw0rd',
                'role': 'merchant',
            }
        }
    )


class LoginRequest(BaseModel):
    """User login request schema"""

    email: str
    password: SecretStr = Field(
        ..., max_length=72, description='User password (max 72 bytes as UTF-8)'
    )

    @field_validator('password')
    @classmethod
    def check_password_bytes(cls, password: SecretStr) -> SecretStr:
        return _check_password_bytes(password)

    model_config = ConfigDict(
        json_schema_extra={'example': {'email': 'bistro@example.com', 'password': 'P@ssw0rd'}}
    )


class UserResponse(BaseModel):
    """Public user view (never carries the password hash)"""

    id: int
    name: str
    email: str
    role: UserRole
    created_at: Optional[datetime] = None

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            'example': {
                'id': 1,
                'name': 'Green Bistro',
                'email': 'bistro@example.com',
                'role': 'merchant',
                'created_at': '2025-01-01T12:00:00Z',
            }
        },
    )


class LoginResponse(BaseModel):
    message: str
    token: str
    user: UserResponse
