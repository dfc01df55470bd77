import logging
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    title: str = Field(default="repo-view", validation_alias="APP_TITLE")
    templates_dir: Path = Field(default=PACKAGE_DIR / "templates", validation_alias="APP_TEMPLATES_DIR")
    assets_dir: Path = Field(default=PACKAGE_DIR / "assets", validation_alias="APP_ASSETS_DIR")
    colors_path: Path | None = Field(default=None, validation_alias="APP_COLORS_PATH")
    log_level: str = Field(default="INFO", validation_alias="APP_LOG_LEVEL")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"APP_LOG_LEVEL must be a logging level name, got {value!r}")
        return level

    @model_validator(mode="after")
    def default_colors_path(self) -> "AppSettings":
        if self.colors_path is None:
            self.colors_path = self.assets_dir / "colors.json"
        return self
