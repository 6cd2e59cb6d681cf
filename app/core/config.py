from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url

DEFAULT_SQLITE_URL = "sqlite:///./qrforge.db"
DRIVER_NORMALIZATION = {
    # async -> sync
    "mysql+asyncmy": "mysql+pymysql",
    "sqlite+aiosqlite": "sqlite",
    # mysql connector flavors -> pymysql (default in requirements)
    "mysql+mysqlconnector": "mysql+pymysql",
    "mysql+mysqldb": "mysql+pymysql",
    "mysql": "mysql+pymysql",
}


class Settings(BaseSettings):
    db_host: str = Field(default="localhost", validation_alias=AliasChoices("DB_HOST"))
    db_port: int = Field(default=3306, validation_alias=AliasChoices("DB_PORT"))
    db_username: str | None = Field(default=None, validation_alias=AliasChoices("DB_USERNAME"))
    db_password: str | None = Field(default=None, validation_alias=AliasChoices("DB_PASSWORD"))
    db_name: str | None = Field(default="qrforge", validation_alias=AliasChoices("DB_NAME"))
    database_url: str | None = Field(default=None, validation_alias=AliasChoices("DATABASE_URL"))
    app_env: str | None = Field(default=None, validation_alias=AliasChoices("APP_ENV"))
    cors_origins: str | None = Field(default=None, validation_alias=AliasChoices("CORS_ORIGINS"))

    # Prefix for dynamic QR redirect URLs, e.g. https://qr.example.com/r/<slug>
    public_base_url: str = Field(
        default="http://localhost:8000",
        validation_alias=AliasChoices("PUBLIC_BASE_URL"),
    )
    # No authentication yet; every request acts as this user.
    demo_user_id: str = Field(default="demo-user-id", validation_alias=AliasChoices("DEMO_USER_ID"))

    qr_cache_max_size: int = Field(default=50, validation_alias=AliasChoices("QR_CACHE_MAX_SIZE"))
    qr_cache_ttl_ms: int = Field(default=600_000, validation_alias=AliasChoices("QR_CACHE_TTL_MS"))

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


def get_db_url(settings: "Settings") -> str:
    app_env = (settings.app_env or "").strip().lower()
    if app_env in {"local", "dev", "development"}:
        # Local runs always use SQLite so no MySQL server is required.
        return DEFAULT_SQLITE_URL

    if settings.database_url:
        return settings.database_url

    if settings.db_username and settings.db_password and settings.db_name:
        return (
            f"mysql+pymysql://{settings.db_username}:"
            f"{settings.db_password}@{settings.db_host}:{settings.db_port}/"
            f"{settings.db_name}"
        )

    if app_env in {"production", "prod", "staging"}:
        raise ValueError("APP_ENV is set to production/staging but DB configuration is missing")

    return DEFAULT_SQLITE_URL


def normalize_db_url(url: str) -> str:
    """
    Convert async driver URLs to sync equivalents so they can be used
    with the current synchronous SQLAlchemy engine/session setup.
    """
    url_obj = make_url(url)
    driver = url_obj.drivername
    if driver in DRIVER_NORMALIZATION:
        url_obj = url_obj.set(drivername=DRIVER_NORMALIZATION[driver])
    return url_obj.render_as_string(hide_password=False)


settings = Settings()
