"""
Startup configuration.

Values come from the command line first, then from the environment.
All three of token, game id and user id are required.
"""

from typing import Mapping, Optional, Self

from pydantic import BaseModel, ValidationError, field_validator

from lichess_board.core.exceptions import ConfigError

DEFAULT_BASE_URL = "https://lichess.org"
DEFAULT_TIMEOUT = 30.0

# setting name -> environment variable used as fallback
ENVIRONMENT_VARIABLES = {
    "auth_token": "LICHESS_TOKEN",
    "game_id": "LICHESS_GAME_ID",
    "user_id": "LICHESS_USER",
}

MISSING_MESSAGES = {
    "auth_token": "Missing lichess auth token",
    "game_id": "Missing lichess game id",
    "user_id": "Missing lichess user id",
}


class Settings(BaseModel):
    auth_token: str
    game_id: str
    user_id: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    @field_validator("auth_token", "game_id")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ConfigError("Configuration values cannot be blank.")
        return value.strip()

    @field_validator("user_id")
    @classmethod
    def normalize_user_id(cls, value: str) -> str:
        """lichess user ids are compared case-insensitively, so keep the lowercase form only."""
        if not value.strip():
            raise ConfigError("Configuration values cannot be blank.")
        return value.strip().lower()

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ConfigError(f"Base URL must be http(s), got {value!r}.")
        return value.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ConfigError(f"Timeout must be positive, got {value}.")
        return value

    @classmethod
    def from_sources(
        cls, options: Mapping[str, Optional[str]], environ: Mapping[str, str]
    ) -> Self:
        """Merge command line options with environment fallbacks and validate the result."""
        values: dict[str, object] = {
            key: value for key, value in options.items() if value is not None
        }
        for key, variable in ENVIRONMENT_VARIABLES.items():
            if not values.get(key) and environ.get(variable):
                values[key] = environ[variable]

        for key, message in MISSING_MESSAGES.items():
            if not values.get(key):
                raise ConfigError(message)

        try:
            return cls(**values)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc
