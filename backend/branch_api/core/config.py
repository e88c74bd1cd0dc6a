from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", populate_by_name=True)

    app_name: str = "Branch Directory API"
    database_url: str = Field(..., alias="DATABASE_URL")
    secret_key: str = Field(..., alias="SECRET_KEY")
    access_token_expire_minutes: int = Field(60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    algorithm: str = "HS256"
    # wall-clock zone used for "now"; stored opening hours carry no zone
    timezone: str = Field("UTC", alias="TIMEZONE")
    default_locale: str = Field("ar", alias="DEFAULT_LOCALE")
    supported_locales: list[str] = Field(default_factory=lambda: ["ar", "en"], alias="SUPPORTED_LOCALES")
    fallback_locale: str = "en"
    static_otp: str | None = Field(None, alias="STATIC_OTP")
    otp_expire_minutes: int = Field(3, alias="OTP_EXPIRE_MINUTES")
    otp_max_attempts: int = Field(5, alias="OTP_MAX_ATTEMPTS")
    # applied per client address to the login and OTP routes
    auth_rate_limit: str = Field("5/minute", alias="AUTH_RATE_LIMIT")
    default_per_page: int = Field(15, alias="DEFAULT_PER_PAGE")
    max_per_page: int = Field(100, alias="MAX_PER_PAGE")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    cors_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost",
            "http://127.0.0.1",
        ],
        alias="CORS_ORIGINS",
    )


def get_settings() -> Settings:
    return Settings()
