"""Client Configuration: where the investments API lives.

Invariants:
    - backend_url has no trailing slash
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Client settings from FARMINVEST_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FARMINVEST_", env_file=".env", extra="ignore",
    )

    backend_url: str = "http://localhost:3000"

    @field_validator("backend_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def investments_url(self) -> str:
        return f"{self.backend_url}/api/investments"


@lru_cache
def get_client_settings() -> ClientSettings:
    return ClientSettings()
