from typing import Final

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

GITHUB_API_BASE_URL: Final[str] = "https://api.github.com"
DEFAULT_USER_AGENT: Final[str] = "repo-view"
DEFAULT_TIMEOUT: Final[float] = 10.0


class GithubSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    api_base_url: AnyHttpUrl = Field(
        default=GITHUB_API_BASE_URL,
        validation_alias="GITHUB_API_BASE_URL",
    )
    user_agent: str = Field(default=DEFAULT_USER_AGENT, validation_alias="GITHUB_USER_AGENT", min_length=1)
    timeout: float = Field(default=DEFAULT_TIMEOUT, validation_alias="GITHUB_TIMEOUT_SECONDS", gt=0.0)
