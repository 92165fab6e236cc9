from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Atelier"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True

    # Security
    log_user_emails: bool = False
    csp_production: str = "default-src 'self'; frame-ancestors 'none'"

    # Database
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_echo: bool = False

    # Auth
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    session_expire_minutes: int = 60 * 24
    session_cookie_name: str = "session"
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 1

    # Profiles
    initial_points_balance: int = 100

    # Object storage
    storage_bucket: str = "projects"
    storage_endpoint_url: str | None = None  # S3-compatible endpoint, e.g. MinIO
    storage_region: str = "us-east-1"
    # Falls back to the standard AWS credential chain when unset
    storage_access_key_id: str | None = None
    storage_secret_access_key: str | None = None
    signed_url_expire_seconds: int = 3600
    storage_max_upload_bytes: int = 25 * 1024 * 1024

    # Navigation
    login_path: str = "/login"
    register_path: str = "/register"
    dashboard_prefix: str = "/dashboard"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None

    # Redis (optional - app works without it)
    redis_url: str | None = None
    redis_pool_size: int = 10

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if v == "change-this-to-a-secure-random-string":
            raise ValueError(
                "JWT_SECRET_KEY must be changed from default value. "
                "Generate a secure secret with: openssl rand -hex 32"
            )
        if len(v) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Reject wildcards, credentials are allowed on CORS requests."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("initial_points_balance")
    @classmethod
    def validate_initial_points(cls, v: int) -> int:
        if v < 0:
            raise ValueError("INITIAL_POINTS_BALANCE cannot be negative")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
