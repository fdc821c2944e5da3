import bcrypt
from pydantic import SecretStr

from src.platform.config.core_setting import settings
from src.service.mealshare.app.interface.i_password_hasher import IPasswordHasher


class BcryptPasswordHasher(IPasswordHasher):
    """Concrete bcrypt implementation of IPasswordHasher (CPU bound, call off the event loop)"""

    def __init__(self, *, rounds: int | None = None) -> None:
        self.rounds = rounds or settings.BCRYPT_ROUNDS

    def hash_password(self, *, plain_password: SecretStr) -> str:
        """Hash password using bcrypt with SecretStr for security"""
        password_bytes = plain_password.get_secret_value().encode('utf-8')[:72]
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(password_bytes, salt)
        return hashed.decode('utf-8')

    def verify_password(self, *, plain_password: SecretStr, hashed_password: str) -> bool:
        """Verify password using bcrypt with SecretStr for security"""
        password_bytes = plain_password.get_secret_value().encode('utf-8')[:72]
        hashed_bytes = hashed_password.encode('utf-8')
        try:
            return bcrypt.checkpw(password_bytes, hashed_bytes)
        except ValueError:
            # Stored value is not a bcrypt hash
            return False
