from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    App settings.

    Notes:
    - Defaults are local and deterministic (SQLite file next to the repo).
    - Override via `APP_*` env vars, e.g. `APP_JWT_SECRET` for the jwt provider.
    """

    model_config = SettingsConfigDict(env_prefix="APP_", extra="ignore")

    db_url: str | None = None
    authorization_config_path: str | None = None
    log_level: str = "INFO"
    jwt_secret: str | None = None

    def resolved_db_url(self) -> str:
        if self.db_url:
            return self.db_url

        repo_root = Path(__file__).resolve().parents[1]
        db_path = repo_root / "app.db"
        return f"sqlite:///{db_path}"

    def resolved_authorization_config_path(self) -> Path:
        if self.authorization_config_path:
            return Path(self.authorization_config_path)

        repo_root = Path(__file__).resolve().parents[1]
        return repo_root / "config" / "authorization.yaml"


@lru_cache
def get_settings() -> Settings:
    return Settings()
