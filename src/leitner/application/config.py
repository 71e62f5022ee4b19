from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from leitner.domain.constants import DEFAULT_HOST, DEFAULT_PORT


def config_file_path() -> Path:
    return Path.home() / ".config/leitner/config.toml"


class AppConfig(BaseSettings):
    """
    Configuration model for leitner.
    Supports loading from:
    1. Environment variables (LEITNER_*)
    2. Config file (~/.config/leitner/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="LEITNER_",
        extra="ignore",
    )

    # Server
    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Scheduling
    deck_file: Path | None = None
    start_day: int = Field(default=0, ge=0)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # Earlier sources take priority: init (CLI) > env > TOML
        config_file = config_file_path()
        if config_file.exists():
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=config_file),
            )
        return (
            init_settings,
            env_settings,
        )

    @field_validator("deck_file", mode="before")
    @classmethod
    def resolve_deck_file(cls, v: Any) -> Path | None:
        if v in (None, ""):
            return None
        return Path(v).expanduser().resolve()

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/leitner/config.toml (if exists)
    3. Environment variables (LEITNER_*)
    4. cli_overrides (passed from Typer)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
