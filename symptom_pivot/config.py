from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    database_url: str = "sqlite:///./symptom_pivot.db"

    # CORS configuration - comma-separated list of allowed origins
    # Example: "https://dashboard.example.com,https://reports.example.com"
    cors_allowed_origins: Optional[str] = None

    # Upper bound for the ?limit= query parameter on pivot endpoints
    pivot_max_rows: int = 400

    log_level: str = "INFO"

    # Auto-run alembic migrations on startup (set to "true" in staging)
    run_migrations_on_startup: str = ""

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    def get_cors_origins(self) -> list[str]:
        """Get list of CORS allowed origins, combining defaults with env var.

        - Strips whitespace
        - Removes trailing slashes
        - Deduplicates
        """
        default_origins = [
            "http://localhost:5173",
            "http://localhost:3000",
        ]

        all_origins = list(default_origins)

        if self.cors_allowed_origins:
            for origin in self.cors_allowed_origins.split(","):
                cleaned = origin.strip().rstrip("/")
                if cleaned and cleaned not in all_origins:
                    all_origins.append(cleaned)

        return all_origins


@lru_cache()
def get_settings() -> Settings:
    return Settings()
