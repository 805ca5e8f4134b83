"""Configuration loading with pydantic-settings.

Layers, lowest precedence first:

1. Built-in defaults (``config/models.py``)
2. Global YAML (``~/.config/unrealls/config.yaml``)
3. Project YAML (``<project>/.unrealls/config.yaml``)
4. Environment variables (``UNREALLS__SECTION__KEY``)
5. Keyword arguments to :func:`load_config`

The two YAML files are merged key by key, so a project file only needs the
settings it changes.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from unrealls.config.models import (
    EngineConfig,
    IndexConfig,
    LoggingConfig,
    ServerConfig,
    UnrealLSConfig,
)
from unrealls.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/unrealls/config.yaml").expanduser()
PROJECT_CONFIG_DIR = ".unrealls"
CONFIG_FILENAME = "config.yaml"


def project_config_path(project_root: Path) -> Path:
    return project_root / PROJECT_CONFIG_DIR / CONFIG_FILENAME


def read_yaml_layer(path: Path) -> dict[str, Any]:
    """One YAML layer as a mapping. A missing file is an empty layer.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or its
            top level is not a mapping.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as e:
        raise ConfigError.unreadable(str(path), str(e)) from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top-level value must be a mapping")
    return data


def merge_layers(*layers: dict[str, Any]) -> dict[str, Any]:
    """Merge mappings left to right; nested mappings merge, other values replace."""
    merged: dict[str, Any] = {}
    for layer in layers:
        for key, value in layer.items():
            current = merged.get(key)
            if isinstance(current, dict) and isinstance(value, dict):
                merged[key] = merge_layers(current, value)
            else:
                merged[key] = value
    return merged


class _YamlLayersSource(PydanticBaseSettingsSource):
    """Settings source serving the already-merged YAML layers."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._data = data

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        value = self._data.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return self._data


def _settings_class(yaml_data: dict[str, Any]) -> type[BaseSettings]:
    """Build a settings class bound to *yaml_data* (one class per load)."""

    class UnrealLSSettings(BaseSettings):
        """Root settings. Env vars: UNREALLS__ENGINE__DEFAULT_VERSION, UNREALLS__INDEX__ENABLED, etc."""

        model_config = SettingsConfigDict(
            env_prefix="UNREALLS__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        engine: EngineConfig = EngineConfig()
        index: IndexConfig = IndexConfig()
        server: ServerConfig = ServerConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # First source wins
            return (init_settings, env_settings, _YamlLayersSource(settings_cls, yaml_data))

    return UnrealLSSettings


UnrealLSSettings = _settings_class({})


def _config_error(e: ValidationError) -> ConfigError:
    first = e.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    return ConfigError.invalid_value(field, first.get("input"), first["msg"])


def load_config(project_root: Path | None = None, **overrides: Any) -> UnrealLSConfig:
    """Resolve the configuration for a project.

    Args:
        project_root: Project directory whose ``.unrealls/config.yaml`` is
            layered over the global file. Defaults to the current directory.
        **overrides: Section values with the highest precedence, e.g.
            ``index={"enabled": False}``.

    Raises:
        ConfigError: On an unreadable or malformed YAML file, or a value that
            fails validation.
    """
    root = project_root or Path.cwd()
    yaml_data = merge_layers(
        read_yaml_layer(GLOBAL_CONFIG_PATH),
        read_yaml_layer(project_config_path(root)),
    )
    try:
        return _settings_class(yaml_data)(**overrides)  # type: ignore[return-value]
    except ValidationError as e:
        raise _config_error(e) from e
