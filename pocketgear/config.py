from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    mongodb_uri: Optional[str] = None
    mongodb_db: str = "pocketgear"
    products_collection: str = "products"
    mongodb_timeout_ms: int = 5000
    snapshot_path: Path = PACKAGE_DIR / "static" / "data.json"
    secret_key: str = "dev-secret-key-change-in-production"
    session_cookie: str = "pocketgear_session"
    admin_email: str = "admin@pocketgear.dev"
    admin_password: str = "pocketgear"
    created_by_fallback: str = "unknown"
    debug: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()
