"""Configuration management using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_path: str = "./data/todo.db"
    api_prefix: str = "/api"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Signs the session cookie; the cookie itself only carries the session id
    secret_key: str = "change-me-in-production-use-env-var"

    # Bcrypt work factor (higher = more secure but slower)
    # For tests, use 4 for faster execution while maintaining functionality
    bcrypt_work_factor: int = 12
    password_min_length: int = 8

    # Session Configuration
    session_cookie_name: str = "todo_session"
    session_cookie_secure: bool = False
    session_ttl_seconds: int = 86400
    # Sliding expiry pushes expires_at forward on every resolve,
    # but never past created_at + session_max_age_seconds
    session_sliding_expiry: bool = True
    session_max_age_seconds: int = 30 * 86400

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )


settings = Settings()
