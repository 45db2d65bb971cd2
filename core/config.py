from pydantic_settings import BaseSettings
from pydantic import ConfigDict, field_validator

class Settings(BaseSettings):
    model_config = ConfigDict(env_file=".env", extra="ignore")

    ENV: str = "development"

    DATABASE_URL: str = "sqlite:///./sessions.db"
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 30
    REFRESH_TOKEN_BYTES: int = 48
    BCRYPT_ROUNDS: int = 12
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    @field_validator("ACCESS_TOKEN_EXPIRE_MINUTES", "REFRESH_TOKEN_EXPIRE_DAYS")
    @classmethod
    def at_least_one(cls, value):
        return max(1, value)

    @field_validator("REFRESH_TOKEN_BYTES")
    @classmethod
    def enough_entropy(cls, value):
        return max(32, value)

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def valid_rounds(cls, value):
        # bcrypt only accepts log rounds in [4, 31]
        if not 4 <= value <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return value


settings = Settings()
