"""
Greenfields Configuration
Layered configuration management using Pydantic Settings.

Sources, lowest to highest precedence:
    1. hard-coded defaults on the models below
    2. config/default.toml (required)
    3. config/{RUN_ENVIRONMENT}.toml (optional)
    4. config/local.toml (optional)
    5. APP_-prefixed environment variables, nested with "__"
       (APP_SERVER__PORT=8080, APP_LOG__LEVEL=debug)
"""
import logging
import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from greenfields import __version__
from greenfields.core.exceptions import ConfigError

# Project root holds the config/ directory when running from a checkout
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DEFAULT_CONFIG_DIR = PROJECT_ROOT / "config"
DEFAULT_RUN_ENVIRONMENT = "local"

# "trace" is accepted for parity with the deployment configs and maps to DEBUG
LOG_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


class ServerSettings(BaseModel):
    """Address the HTTP listener binds to."""

    model_config = ConfigDict(frozen=True)

    host: str
    port: int = Field(..., ge=1, le=65535)


class LogSettings(BaseModel):
    """Log verbosity and renderer."""

    model_config = ConfigDict(frozen=True)

    level: str
    format: Literal["pretty", "json"]

    @field_validator("level", "format", mode="before")
    @classmethod
    def normalize(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("level")
    @classmethod
    def check_level(cls, v: str) -> str:
        if v not in LOG_LEVELS:
            raise ValueError(f"unknown log level '{v}', expected one of: {', '.join(LOG_LEVELS)}")
        return v

    @property
    def stdlib_level(self) -> int:
        return LOG_LEVELS[self.level]


class Metadata(BaseModel):
    """Name and version reported in logs and the health endpoint."""

    model_config = ConfigDict(frozen=True)

    name: str = "greenfields-of-cambridge"
    version: str = __version__


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base, recursing into nested tables."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def get_config_dir() -> Path:
    """Directory holding the TOML files, overridable with CONFIG_DIR."""
    return Path(os.getenv("CONFIG_DIR", str(DEFAULT_CONFIG_DIR)))


def get_run_environment() -> str:
    """Name of the overlay file to apply, from RUN_ENVIRONMENT."""
    return os.getenv("RUN_ENVIRONMENT", DEFAULT_RUN_ENVIRONMENT).strip() or DEFAULT_RUN_ENVIRONMENT


class LayeredTomlSettingsSource(PydanticBaseSettingsSource):
    """
    Settings source reading the TOML overlay files.

    default.toml must exist; the environment overlay and local.toml are
    applied on top of it when present.
    """

    def __init__(self, settings_cls: type[BaseSettings]):
        super().__init__(settings_cls)
        self.config_dir = get_config_dir()
        self.run_environment = get_run_environment()
        self._data: Optional[dict[str, Any]] = None

    def overlay_paths(self) -> list[Path]:
        """Files to merge, in increasing precedence."""
        paths = [self.config_dir / "default.toml"]
        for name in (self.run_environment, "local"):
            path = self.config_dir / f"{name}.toml"
            if path not in paths:
                paths.append(path)
        return paths

    def _read(self, path: Path) -> dict[str, Any]:
        try:
            with path.open("rb") as fh:
                return tomllib.load(fh)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    def load(self) -> dict[str, Any]:
        if self._data is not None:
            return self._data

        default_path, *overlays = self.overlay_paths()
        if not default_path.is_file():
            raise ConfigError(f"Required configuration file not found: {default_path}")

        data: dict[str, Any] = {"environment": self.run_environment}
        data = _deep_merge(data, self._read(default_path))
        for path in overlays:
            if path.is_file():
                data = _deep_merge(data, self._read(path))

        self._data = data
        return data

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return self.load().get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return self.load()


class Settings(BaseSettings):
    """Application settings, frozen once loaded."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    server: ServerSettings
    log: LogSettings
    metadata: Metadata = Metadata()

    # ===== Environment =====
    environment: str = DEFAULT_RUN_ENVIRONMENT

    # ===== Sentry Error Tracking =====
    sentry_dsn: Optional[str] = None
    sentry_traces_sample_rate: float = 0.0

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            LayeredTomlSettingsSource(settings_cls),
        )


def _describe_errors(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        if error["type"] == "missing":
            problems.append(f"missing required key '{location}'")
        else:
            problems.append(f"'{location}': {error['msg']}")
    return "; ".join(problems)


def load_settings(**overrides: Any) -> Settings:
    """
    Build settings from every configuration layer.

    Raises:
        ConfigError: If default.toml is missing, a file is not valid TOML,
            or a required key is absent or invalid after merging.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed: {_describe_errors(e)}") from e


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()
