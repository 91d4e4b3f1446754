from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from kanzi.domain.constants import (
    BOX_INTERVALS_DAYS,
    DEFAULT_CHOICE_COUNT,
    DEFAULT_GRADE,
    DEFAULT_QUEUE_SIZE,
    MASTERY_THRESHOLD,
    MAX_GRADE,
    MIN_GRADE,
    PROGRESS_SAMPLE_SIZE,
)


def config_file() -> Path:
    return Path.home() / ".config/kanzi/config.toml"


class AppConfig(BaseSettings):
    """
    Configuration model for kanzi.
    Supports loading from:
    1. Environment variables (KANZI_*)
    2. Config file (~/.config/kanzi/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="KANZI_",
        extra="ignore",
    )

    # Paths
    state_file: Path = Field(default_factory=lambda: Path.home() / ".config/kanzi/state.json")
    catalog_file: Path | None = None  # None = bundled dataset

    # Profile
    selected_grade: int | None = DEFAULT_GRADE  # None = all grades

    # Scheduling
    box_intervals_days: tuple[int, ...] = BOX_INTERVALS_DAYS
    mastery_threshold: int = MASTERY_THRESHOLD

    # Drill
    queue_size: int = Field(default=DEFAULT_QUEUE_SIZE, ge=1)
    choice_count: int = Field(default=DEFAULT_CHOICE_COUNT, ge=2)
    progress_sample_size: int = Field(default=PROGRESS_SAMPLE_SIZE, ge=1)
    seed: int | None = None

    verbose: int = 0

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

        toml_file = config_file()
        if toml_file.exists():
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("state_file", "catalog_file", mode="before")
    @classmethod
    def resolve_path(cls, v: Any) -> Path | None:
        if v is None or v == "":
            return None
        return Path(v).expanduser().resolve()

    @field_validator("selected_grade")
    @classmethod
    def check_grade(cls, v: int | None) -> int | None:
        if v is not None and not MIN_GRADE <= v <= MAX_GRADE:
            raise ValueError(f"selected_grade must be between {MIN_GRADE} and {MAX_GRADE}")
        return v

    @field_validator("box_intervals_days")
    @classmethod
    def check_intervals(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        if not v:
            raise ValueError("box_intervals_days must not be empty")
        if any(d < 0 for d in v):
            raise ValueError("box_intervals_days must not be negative")
        if any(a > b for a, b in zip(v, v[1:])):
            raise ValueError("box_intervals_days must be non-decreasing")
        return v

    @model_validator(mode="after")
    def check_mastery_threshold(self) -> "AppConfig":
        max_level = len(self.box_intervals_days) - 1
        if not 0 <= self.mastery_threshold <= max_level:
            raise ValueError(f"mastery_threshold must be between 0 and {max_level}")
        return self


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/kanzi/config.toml (if exists)
    3. Environment variables (KANZI_*)
    4. cli_overrides (passed from Typer); None values are ignored
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
