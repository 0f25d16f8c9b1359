from __future__ import annotations

from functools import cache
from pathlib import Path
from typing import Any, ClassVar, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from usermind.exceptions import ConfigError
from usermind.logging import get_logger

__all__ = [
    "UsermindConfig",
    "FlowsConfig",
    "load_config",
    "get_user_config_path",
    "PROJECT_CONFIG_FILENAME",
]

logger = get_logger(__name__)

PROJECT_CONFIG_FILENAME = "usermind.yaml"


class FlowsConfig(BaseModel):
    """Settings for flow file discovery.

    Attributes:
        directory: Directory scanned by ``usermind validate`` when no files
            are given (default: ./flows).
        patterns: Glob patterns that identify flow files.
        recursive: Whether to descend into subdirectories.
    """

    directory: Path = Field(default_factory=lambda: Path("flows"))
    patterns: list[str] = Field(default_factory=lambda: ["*.yaml", "*.yml"])
    recursive: bool = True

    @field_validator("patterns")
    @classmethod
    def check_patterns_not_empty(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("At least one flow file pattern is required")
        return v


class YamlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from YAML files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file, encoding="utf-8") as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                    field=None,
                    value=None,
                ) from e
            if loaded is None:
                logger.warning("config_file_empty", path=str(yaml_file))
            elif not isinstance(loaded, dict):
                raise ConfigError(
                    message=f"Config file {yaml_file} must contain a mapping",
                    value=loaded,
                )
            else:
                self._config_data = loaded

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get value for a specific field from the YAML config."""
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return the complete config data."""
        return self._config_data


class UsermindConfig(BaseSettings):
    """Root configuration object containing all usermind settings."""

    model_config = SettingsConfigDict(
        env_prefix="USERMIND_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    flows: FlowsConfig = Field(default_factory=FlowsConfig)
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

    # Bound per path by load_config(); None means ./usermind.yaml.
    project_config_file: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of settings sources.

        Priority (highest to lowest):
        1. Init settings (explicit keyword arguments)
        2. Environment variables (USERMIND_*)
        3. Project YAML config (./usermind.yaml)
        4. User YAML config (~/.config/usermind/config.yaml)
        """
        project_config_path = cls.project_config_file or (
            Path.cwd() / PROJECT_CONFIG_FILENAME
        )

        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


@cache
def _config_class_for(config_path: Path) -> type[UsermindConfig]:
    """Return a UsermindConfig subclass that reads config_path as project config."""

    class _PathBoundConfig(UsermindConfig):
        project_config_file: ClassVar[Path | None] = config_path

    return _PathBoundConfig


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/usermind/config.yaml
    """
    return Path.home() / ".config" / "usermind" / "config.yaml"


def load_config(config_path: Path | None = None) -> UsermindConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional path to the project config file. Defaults to
            ./usermind.yaml.

    Returns:
        UsermindConfig instance with merged configuration.

    Raises:
        ConfigError: If a config file is not valid YAML or a value fails
            validation.
    """
    if config_path is None:
        config_path = Path.cwd() / PROJECT_CONFIG_FILENAME

    if not config_path.exists():
        logger.info("project_config_not_found", path=str(config_path))

    try:
        return _config_class_for(config_path)()
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e