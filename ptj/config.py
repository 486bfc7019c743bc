from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import unquote


def _csv_env(name: str, default: str) -> list[str]:
    raw = os.getenv(name, default)
    return [part.strip() for part in raw.split(",") if part.strip()]


@dataclass
class Settings:
    app_name: str = "PTJ Part-Time Jobs"
    environment: str = os.getenv("ENV", "development")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./db/ptj.db")
    db_connect_attempts: int = int(os.getenv("DB_CONNECT_ATTEMPTS", "5"))
    jwt_secret_key: str = os.getenv("JWT_SECRET_KEY", os.getenv("AUTH_SECRET", "ptj-dev-secret"))
    jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
    jwt_expire_minutes: int = int(os.getenv("JWT_EXPIRE_MINUTES", str(60 * 24)))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    cors_origins: list[str] = field(
        default_factory=lambda: _csv_env("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
    )
    default_admin_email: str = os.getenv("DEFAULT_ADMIN_EMAIL", "admin@ptj.local")
    default_admin_password: str = os.getenv("DEFAULT_ADMIN_PASSWORD", "admin1234")
    min_rejection_reason_length: int = int(os.getenv("MIN_REJECTION_REASON_LENGTH", "10"))
    default_page_size: int = 10
    max_page_size: int = 100

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    def ensure_directories(self) -> None:
        self._ensure_sqlite_directory()

    def _ensure_sqlite_directory(self) -> None:
        if not self.database_url.startswith("sqlite:///"):
            return
        raw_path = self.database_url.replace("sqlite:///", "", 1)
        if not raw_path or raw_path == ":memory:":
            return
        db_path = Path(unquote(raw_path))
        if not db_path.is_absolute():
            db_path = Path(".") / db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)


settings = Settings()
