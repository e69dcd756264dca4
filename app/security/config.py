from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator


class AuthorizationConfigError(ValueError):
    """Raised when the authorization YAML configuration is invalid."""


class JwtConfig(BaseModel):
    algorithms: list[str] = Field(default_factory=lambda: ["HS256"])
    audience: str | None = None
    issuer: str | None = None
    user_id_claims: list[str] = Field(default_factory=lambda: ["oid", "sub"])
    roles_claim: str = "roles"

    @field_validator("algorithms", "user_id_claims")
    @classmethod
    def _not_empty(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("must contain at least one entry")
        return value


class AuthConfig(BaseModel):
    provider: Literal["dummy", "jwt"] = "dummy"
    authorization_header: str = "Authorization"
    bearer_prefix: str = "Bearer"
    jwt: JwtConfig = Field(default_factory=JwtConfig)


class AuthorizationConfigModel(BaseModel):
    auth: AuthConfig = Field(default_factory=AuthConfig)


class AuthorizationConfig:
    """
    Runtime wrapper around the validated config model.
    """

    def __init__(self, model: AuthorizationConfigModel, jwt_secret: str | None = None):
        self.model = model
        self.jwt_secret = jwt_secret

    @property
    def auth(self) -> AuthConfig:
        return self.model.auth

    @property
    def provider(self) -> str:
        return self.model.auth.provider


def load_authorization_config(path: Path, jwt_secret: str | None = None) -> AuthorizationConfig:
    raw_text = path.read_text(encoding="utf-8")
    raw: dict[str, Any] = yaml.safe_load(raw_text) or {}

    if not isinstance(raw, dict) or "authorization" not in raw:
        raise AuthorizationConfigError(f"Missing top-level 'authorization' key in config: {path}")

    try:
        model = AuthorizationConfigModel.model_validate(raw["authorization"] or {})
    except ValidationError as exc:
        raise AuthorizationConfigError(f"Invalid authorization config {path}: {exc}") from exc

    return AuthorizationConfig(model, jwt_secret=jwt_secret)
