from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from lexirecall.domain.constants import (
    DEFAULT_DAILY_GOAL,
    DEFAULT_DUE_LIMIT,
    DEFAULT_EFFICIENCY_WINDOW_DAYS,
    DEFAULT_NEW_WORDS_RATIO,
    DEFAULT_PREDICTION_DAYS,
    TARGET_VOCABULARY_SIZE,
)


def _config_files() -> list[Path]:
    home = Path.home()
    return [home / ".config/lexirecall/config.toml", home / ".lexirecall.toml"]


class AppConfig(BaseSettings):
    """
    Configuration model for lexirecall.
    Supports loading from:
    1. Environment variables (LEXIRECALL_*)
    2. Config file (~/.config/lexirecall/config.toml or ~/.lexirecall.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="LEXIRECALL_",
        extra="ignore",
    )

    # Storage
    db_path: Path = Field(default_factory=lambda: Path.home() / ".config/lexirecall/lexirecall.db")

    # Study plan
    daily_goal: int = Field(default=DEFAULT_DAILY_GOAL, ge=0)
    new_words_ratio: float = DEFAULT_NEW_WORDS_RATIO

    # Insights
    efficiency_window_days: int = Field(default=DEFAULT_EFFICIENCY_WINDOW_DAYS, ge=0)
    prediction_days: int = Field(default=DEFAULT_PREDICTION_DAYS, ge=0)
    total_words: int = Field(default=TARGET_VOCABULARY_SIZE, ge=0)

    # Queue
    due_limit: int = Field(default=DEFAULT_DUE_LIMIT, ge=1)

    verbose: int = 1

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

        # First existing file wins
        toml_file = next((f for f in _config_files() if f.exists()), None)

        # Earlier sources take priority: CLI overrides, then env, then TOML
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("new_words_ratio", mode="before")
    @classmethod
    def clamp_ratio(cls, v: Any) -> float:
        return max(0.0, min(1.0, float(v)))

    @field_validator("db_path", mode="before")
    @classmethod
    def resolve_db_path(cls, v: Any) -> Path:
        return Path(v).expanduser()


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/lexirecall/config.toml (if exists)
    3. Environment variables (LEXIRECALL_*)
    4. cli_overrides (passed from Typer)
    """
    # Typer passes None for options the user did not set.
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
