# brandmate/config.py
import os
from pathlib import Path
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file

DEV_JWT_SECRET = "dev-secret-change-me"

def _split_origins(raw: str) -> list[str]:
    return [o.strip() for o in raw.split(",") if o.strip()]

class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "BrandMate Backend API"
    APP_VERSION: str = "1.0.0"
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Tortoise connection URL (sqlite for local dev, postgres:// in production)
    database_url: str = os.getenv("DATABASE_URL", "sqlite://brandmate.sqlite3")

    # JWT signing secret; rotating it invalidates every issued token
    jwt_secret: str = os.getenv("JWT_SECRET", DEV_JWT_SECRET)

    # CORS origins for the mobile/web frontend
    CORS_ORIGINS: list[str] = _split_origins(
        os.getenv("CORS_ORIGINS", "http://localhost:8081,http://localhost:19006,http://localhost:3000")
    )

    # Default admin, created on first startup only when ADMIN_PASSWORD is set
    admin_username: str = os.getenv("ADMIN_USERNAME", "admin")
    admin_email: str = os.getenv("ADMIN_EMAIL", "admin@example.com")
    admin_password: str | None = os.getenv("ADMIN_PASSWORD")

    # Client settings (used by brandmate.client)
    api_base_url_dev: str = "http://localhost:3000"
    api_base_url_prod: str = "https://brandmatebackend.onrender.com"
    api_base_url_override: str | None = os.getenv("API_BASE_URL")
    client_timeout_sec: float = float(os.getenv("CLIENT_TIMEOUT_SEC", "10"))
    session_file: Path = Path(os.getenv("SESSION_FILE", str(Path.home() / ".brandmate" / "session.json")))

    @property
    def is_development(self) -> bool:
        return self.env.lower() in ("dev", "development")

    @property
    def api_base_url(self) -> str:
        """Base URL the client talks to: explicit override, else dev/prod default."""
        if self.api_base_url_override:
            return self.api_base_url_override.rstrip("/")
        return self.api_base_url_dev if self.is_development else self.api_base_url_prod

settings = Settings()  # Instantiate configuration
