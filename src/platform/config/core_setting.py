from pathlib import Path

from pydantic import SecretStr, field_validator
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

    PROJECT_NAME: str = 'Hotel Booking System'
    VERSION: str = '0.1.0'
    DEBUG: bool = False  # Enables args/return IO logging and the rotating file sink

    # PostgreSQL Configuration
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'hotel_booking_db'

    # Connection pool tuning
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30  # Seconds to wait for a pooled connection
    DB_POOL_RECYCLE: int = 3600  # Recycle connections after one hour
    DB_POOL_PRE_PING: bool = True

    # OTP policy
    OTP_LENGTH: int = 6
    OTP_EXPIRATION_MINUTES: int = 15
    OTP_MAX_ATTEMPTS: int = 5
    OTP_MAX_RESENDS: int = 3
    OTP_BCRYPT_ROUNDS: int = 12

    # Booking policy
    BOOKING_EMAIL_VERIFICATION_ENABLED: bool = True

    @field_validator('OTP_BCRYPT_ROUNDS')
    @classmethod
    def check_bcrypt_rounds(cls, v: int) -> int:
        # bcrypt accepts cost factors 4..31
        if not 4 <= v <= 31:
            raise ValueError('OTP_BCRYPT_ROUNDS must be between 4 and 31')
        return v

    @field_validator('OTP_LENGTH')
    @classmethod
    def check_otp_length(cls, v: int) -> int:
        if not 4 <= v <= 10:
            raise ValueError('OTP_LENGTH must be between 4 and 10')
        return v

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:'
            f'{self.POSTGRES_PASSWORD.get_secret_value()}@'
            f'{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )


settings = Settings()  # type: ignore
