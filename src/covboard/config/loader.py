"""Configuration loading with pydantic-settings.

Sources, highest precedence first:
1. Direct kwargs
2. Environment variables (COVBOARD__SECTION__KEY)
3. Repo config (.covboard/config.yaml)
4. Global config (~/.config/covboard/config.yaml)
5. Built-in defaults
"""

import tempfile
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from covboard.config.models import (
    CovboardConfig,
    DashboardConfig,
    DiscoveryConfig,
    LoggingConfig,
    ReportsConfig,
    RunnerConfig,
)
from covboard.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/covboard/config.yaml").expanduser()
REPO_CONFIG_RELPATH = Path(".covboard") / "config.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top-level value must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class _YamlSource(PydanticBaseSettingsSource):
    """Lowest-precedence source backed by already-merged YAML files."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._data = data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:  # noqa: ARG002
        value = self._data.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return self._data


def _settings_for(yaml_data: dict[str, Any]) -> type[BaseSettings]:
    # One class per load keeps the YAML layer off shared state
    class _Settings(BaseSettings):
        model_config = SettingsConfigDict(
            env_prefix="COVBOARD__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        runner: RunnerConfig = RunnerConfig()
        discovery: DiscoveryConfig = DiscoveryConfig()
        reports: ReportsConfig = ReportsConfig()
        dashboard: DashboardConfig = DashboardConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_data))

    return _Settings


def load_config(config_root: Path | None = None, **kwargs: Any) -> CovboardConfig:
    """Load config: defaults < global yaml < repo yaml < env vars < kwargs.

    Args:
        config_root: Directory holding .covboard/config.yaml.
                     Defaults to current working directory.
        **kwargs: Section overrides (highest precedence).

    Raises:
        ConfigError: On invalid YAML syntax or validation errors.
    """
    repo_file = (config_root or Path.cwd()) / REPO_CONFIG_RELPATH
    yaml_data = _deep_merge(_load_yaml(GLOBAL_CONFIG_PATH), _load_yaml(repo_file))

    try:
        settings = _settings_for(yaml_data)(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
    return CovboardConfig.model_validate(settings.model_dump())


def resolve_reports_dir(config: CovboardConfig) -> Path:
    """Directory for generated HTML reports, respecting reports.directory."""
    if config.reports.directory:
        return Path(config.reports.directory).expanduser()
    return Path(tempfile.gettempdir()) / "covboard-reports"
