import os
from functools import lru_cache

# Prefer loading environment variables from a .env file if one exists
from dotenv import load_dotenv, find_dotenv

_env_path = find_dotenv(usecwd=True)
if _env_path:
    load_dotenv(_env_path, override=False)


DEFAULT_SECRET_KEY = "change_me_secret"


class Settings:
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./catalog_admin.db")
    SECRET_KEY: str = os.getenv("SECRET_KEY", DEFAULT_SECRET_KEY)
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    # Default to 7 days so dashboard sessions last a week
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(7 * 24 * 60)))
    # Comma separated list of allowed origins for the dashboard frontend
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")
    # Single-record lookups answer 200/null when off, 404 when on
    NOT_FOUND_AS_404: bool = bool(int(os.getenv("NOT_FOUND_AS_404", "0")))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def uses_default_secret(self) -> bool:
        return self.SECRET_KEY == DEFAULT_SECRET_KEY

    @property
    def cors_origins(self):
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings():
    return Settings()
