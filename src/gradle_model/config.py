"""Configuration loading and management for the Gradle project model.

Configuration sources are merged in priority order:
    1. Defaults (defined in ModelConfig)
    2. Global config (~/.gradle-model.toml)
    3. Project config (./gradle-model.toml)
    4. Explicit config file
    5. Environment variables (GRADLE_MODEL_* prefix)
    6. Overrides (passed as kwargs, typically from CLI flags)

Example:
    >>> config = load_config(verbose=True, compile_on_save=True)
    >>> config.verbosity
    'verbose'
    >>> config.compile_on_save
    True
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError
from .quality import ProjectQuality

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "GRADLE_MODEL_"
GLOBAL_CONFIG_NAME = ".gradle-model.toml"
PROJECT_CONFIG_NAME = "gradle-model.toml"


@dataclass(frozen=True)
class ModelConfig:
    """Settings for loading and querying project models.

    Attributes:
        Loading:
            fallback_quality: Quality assigned to heuristically loaded snapshots
            build_dir_name: Gradle build directory, relative to the project
            libs_dir_name: Directory of local jars put on every compile classpath
            property_prefix: gradle.properties prefix of IDE-specific settings

        Project option defaults (used when the project does not set them):
            compile_on_save: Compile changed sources on save
            augmented_build: Run builds with the IDE's init scripts
            jdk_platform: Name of the JDK platform to run builds with

        Output control:
            verbosity: Logging verbosity level
    """

    # Loading
    fallback_quality: str = "FALLBACK"
    build_dir_name: str = "build"
    libs_dir_name: str = "libs"
    property_prefix: str = "ide."

    # Project option defaults
    compile_on_save: bool = False
    augmented_build: bool = True
    jdk_platform: Optional[str] = None

    # Output control
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        try:
            ProjectQuality.parse(self.fallback_quality)
        except ValueError as e:
            raise InvalidConfigError("fallback_quality", self.fallback_quality, str(e))

        for name in ("build_dir_name", "libs_dir_name"):
            value = getattr(self, name)
            if not value or Path(value).is_absolute():
                raise InvalidConfigError(name, value, "must be a non-empty relative path")

        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected quiet, normal or verbose"
            )

    @property
    def fallback_project_quality(self) -> ProjectQuality:
        return ProjectQuality.parse(self.fallback_quality)


DEFAULT_CONFIG = ModelConfig()


def load_config(config_file: Optional[Path] = None, **overrides) -> ModelConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated ModelConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / GLOBAL_CONFIG_NAME
    if global_config.exists():
        merged.update(_read_config_file(global_config, "global config"))

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        merged.update(_read_config_file(project_config, "project config"))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_read_config_file(config_file, "config file"))

    merged.update(_load_env_vars())

    # Convert verbosity boolean flags to string
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update(overrides)

    try:
        return ModelConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _read_config_file(path: Path, label: str) -> dict:
    try:
        data = _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid {label} '{path}': {e}")
    # Accept both a bare table and a [gradle-model] section
    return dict(data.get("gradle-model", data))


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from GRADLE_MODEL_* environment variables.

    Returns:
        Dict of field_name -> parsed_value for any GRADLE_MODEL_* vars found.
    """
    type_hints = get_type_hints(ModelConfig)

    result: dict[str, Any] = {}

    for field_name in ModelConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(field_name, env_value, f"{env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    return result


def parse_bool(value: str) -> bool:
    """Parse true/false/1/0/yes/no/on/off."""
    lower = value.strip().lower()
    if lower in ("true", "1", "yes", "on"):
        return True
    if lower in ("false", "0", "no", "off"):
        return False
    raise ValueError(f"expected true/false, got '{value}'")


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Handle Optional[X] which is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        return parse_bool(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If no TOML parser is available
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            # Fallback to tomli for Python 3.9-3.10
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
