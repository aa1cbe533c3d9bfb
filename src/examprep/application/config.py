import json
import tomllib
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    NoDecode,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from examprep.domain.constants import (
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_PAPERS,
    DEFAULT_PERIOD_DAYS,
)
from examprep.domain.exceptions import ConfigurationError

CONFIG_FILE = Path.home() / ".config/examprep/config.toml"


class StatsSettings(BaseSettings):
    """
    Configuration for examprep.
    Supports loading from:
    1. Environment variables (EXAMPREP_*)
    2. Config file (~/.config/examprep/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="EXAMPREP_",
        extra="ignore",
    )

    # Reporting
    papers: Annotated[list[str], NoDecode] = Field(default_factory=lambda: list(DEFAULT_PAPERS))
    period_days: int = Field(default=DEFAULT_PERIOD_DAYS, ge=1)
    history_limit: int = Field(default=DEFAULT_HISTORY_LIMIT, ge=0)
    streak_strategy: Literal["seed", "dates"] = "seed"

    # Input
    records_path: Path | None = None

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

        # CLI overrides win over env, env wins over the config file
        if CONFIG_FILE.exists():
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=CONFIG_FILE),
            )
        return (init_settings, env_settings)

    @field_validator("papers", mode="before")
    @classmethod
    def split_papers(cls, v: Any) -> Any:
        # Allow EXAMPREP_PAPERS=paper1,paper2 as well as a JSON list
        if isinstance(v, str):
            if v.lstrip().startswith("["):
                return json.loads(v)
            return [p.strip() for p in v.split(",") if p.strip()]
        return v

    @field_validator("records_path", mode="before")
    @classmethod
    def resolve_records_path(cls, v: Any) -> Path | None:
        if v:
            return Path(v).expanduser().resolve()
        return None


def resolve_settings(cli_overrides: dict[str, Any] | None = None) -> StatsSettings:
    """
    Layered configuration resolution.
    1. Defaults in StatsSettings
    2. ~/.config/examprep/config.toml (if exists)
    3. Environment variables (EXAMPREP_*)
    4. cli_overrides (None values are dropped)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    try:
        return StatsSettings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration: {e.error_count()} error(s)",
            context={"errors": e.errors(include_url=False)},
        ) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Could not parse config file: {e}", context={"path": str(CONFIG_FILE)}
        ) from e
