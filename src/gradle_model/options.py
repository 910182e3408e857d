"""Per-project IDE options.

An option set in the project's ``gradle.properties`` (under the configured
prefix) wins over the configuration default.
"""

from __future__ import annotations

import logging
from typing import Optional

from .config import DEFAULT_CONFIG, ModelConfig, parse_bool
from .snapshot import ProjectSnapshot

logger = logging.getLogger(__name__)

PROP_JDK_PLATFORM = "jdkPlatform"
PROP_COMPILE_ON_SAVE = "compile.on.save"
PROP_AUGMENTED_BUILD = "augmented.build"


def _option_enabled(snapshot: ProjectSnapshot, option: str, default: bool) -> bool:
    value = snapshot.base_project.ide_property(option)
    if value is None:
        return default
    try:
        return parse_bool(value)
    except ValueError:
        logger.warning(
            "Ignoring %s=%r in project %s, using %s",
            option,
            value,
            snapshot.base_project.name,
            default,
        )
        return default


def is_compile_on_save_enabled(snapshot: ProjectSnapshot, config: ModelConfig = DEFAULT_CONFIG) -> bool:
    return _option_enabled(snapshot, PROP_COMPILE_ON_SAVE, config.compile_on_save)


def is_augmented_build_enabled(snapshot: ProjectSnapshot, config: ModelConfig = DEFAULT_CONFIG) -> bool:
    return _option_enabled(snapshot, PROP_AUGMENTED_BUILD, config.augmented_build)


def active_jdk_platform(snapshot: ProjectSnapshot, config: ModelConfig = DEFAULT_CONFIG) -> Optional[str]:
    """Platform named by the project, else the configured one; None means the default JDK."""
    platform = snapshot.base_project.ide_property(PROP_JDK_PLATFORM)
    return platform or config.jdk_platform or None
