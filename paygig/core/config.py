"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./paygig.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None
    # SQLite only: seconds a writer waits for the database lock.
    busy_timeout: float = 15.0


class SecuritySettings(BaseModel):
    jwt_secret: str = Field(default="change-me", min_length=8)
    algorithm: str = "HS256"
    audience: Optional[str] = None


class TelegramSettings(BaseModel):
    bot_token: str = ""
    admin_chat_id: str = ""
    webhook_secret: Optional[str] = None
    api_base: str = "https://api.telegram.org"
    timeout: float = 10.0


class WalletSettings(BaseModel):
    currency: str = "NGN"
    signup_bonus: int = Field(default=0, ge=0)
    referral_bonus: int = Field(default=0, ge=0)
    report_page_size: int = Field(default=10, gt=0, le=50)
    settlement_retries: int = Field(default=1, ge=0)
    voucher_digits: int = Field(default=9, ge=6, le=18)
    voucher_suffix: str = Field(default="S", min_length=1, max_length=1)


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "PayGig Wallet Server"
    api_prefix: str = "/api"
    log_level: str = "INFO"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    telegram: TelegramSettings = TelegramSettings()
    wallet: WalletSettings = WalletSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def jwt_secret(self) -> str:
        return self.security.jwt_secret

    @property
    def algorithm(self) -> str:
        return self.security.algorithm

    @property
    def telegram_enabled(self) -> bool:
        return bool(self.telegram.bot_token and self.telegram.admin_chat_id)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
