from pathlib import Path
from typing import List

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'MealShare'
    VERSION: str = '0.1.0'
    DEBUG: bool = False

    # Server
    HOST: str = '0.0.0.0'
    PORT: int = 3000

    # Security
    SECRET_KEY: SecretStr = Field(
        default=SecretStr('test_secret_key_change_in_production'),
        validation_alias=AliasChoices('SECRET_KEY', 'JWT_SECRET'),
    )
    ALGORITHM: str = 'HS256'
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7
    BCRYPT_ROUNDS: int = Field(default=12, ge=4, le=31)

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = ['*']

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, list):
            return v
        return []

    # Database
    DATABASE_URL: str = 'sqlite:///./mealshare.db'
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: float = 30.0  # Wait for a pooled connection (seconds)
    DB_POOL_RECYCLE: int = 3600
    DB_OPERATION_TIMEOUT: float = 10.0  # Upper bound for one unit of storage work (seconds)
    SQLITE_BUSY_TIMEOUT: float = 30.0  # sqlite3 lock wait (seconds)

    # Reservation rules
    RESERVATION_COOLDOWN_DAYS: int = Field(default=3, ge=0)

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        url = self.DATABASE_URL
        if url.startswith('postgres://'):
            return url.replace('postgres://', 'postgresql+asyncpg://', 1)
        if url.startswith('postgresql://'):
            return url.replace('postgresql://', 'postgresql+asyncpg://', 1)
        if url.startswith('sqlite:///'):
            return url.replace('sqlite:///', 'sqlite+aiosqlite:///', 1)
        return url


settings = Settings()  # type: ignore
