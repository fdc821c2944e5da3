"""
MealShare domain errors

Each error carries the HTTP status and the machine-readable `code` the API boundary
reports next to the human-readable message.
"""

from src.platform.exception.exceptions import (
    AuthenticationError,
    DomainError,
    ForbiddenError,
    LoginError,
    NotFoundError,
)


# ========== Identity ==========


class DuplicateEmailError(DomainError):
    code = 'DUPLICATE_EMAIL'

    def __init__(self, message: str = 'Email is already registered.') -> None:
        super().__init__(message, 400)


class UserNotFoundError(LoginError):
    code = 'USER_NOT_FOUND'

    def __init__(self, message: str = 'User not found.') -> None:
        super().__init__(message)


class InvalidCredentialsError(LoginError):
    code = 'INVALID_CREDENTIALS'

    def __init__(self, message: str = 'Incorrect password.') -> None:
        super().__init__(message)


# ========== Bearer token ==========


class MissingTokenError(AuthenticationError):
    code = 'MISSING_TOKEN'

    def __init__(self, message: str = 'Missing token.') -> None:
        super().__init__(message)


class InvalidTokenError(ForbiddenError):
    code = 'INVALID_TOKEN'

    def __init__(self, message: str = 'Invalid token.') -> None:
        super().__init__(message)


# ========== Reservation ==========


class MealNotFoundError(NotFoundError):
    def __init__(self, message: str = 'Meal not found.') -> None:
        super().__init__(message)


class CooldownActiveError(DomainError):
    code = 'COOLDOWN_ACTIVE'

    def __init__(self, message: str = 'You can only reserve one meal every 3 days.') -> None:
        super().__init__(message, 400)


class SoldOutError(DomainError):
    code = 'SOLD_OUT'

    def __init__(self, message: str = 'No portions left for this meal.') -> None:
        super().__init__(message, 400)
