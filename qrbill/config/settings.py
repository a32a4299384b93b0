"""Central configuration for the QR bill codec."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_VERSION = "0200"
DEFAULT_LOG_LEVEL = "WARNING"


def get_app_name() -> str:
    """Get application name."""
    return "QR Bill Codec"


def get_app_version() -> str:
    """Get application version from pyproject.toml."""
    try:
        import tomli
        pyproject_path = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            pyproject = tomli.load(f)
            return pyproject.get("project", {}).get("version", "0.1.0")
    except Exception:
        # Fallback version if pyproject.toml cannot be read
        return "0.1.0"


def get_strict_mode() -> bool:
    """Check if documents with validation errors should be rejected.

    Returns:
        True unless QRBILL_STRICT is set to something other than 'true'
        (case-insensitive)
    """
    env_value = os.getenv('QRBILL_STRICT', 'true')
    return env_value.lower() == 'true'


def get_default_version() -> str:
    """Get the format version used for newly created documents.

    Returns:
        4-digit version from QRBILL_DEFAULT_VERSION, default "0200"
    """
    from ..pipeline.schema_registry import find_schema, parse_version

    version = os.getenv('QRBILL_DEFAULT_VERSION', DEFAULT_VERSION).strip()
    if find_schema(parse_version(version)) is None:
        logger.warning(f"Invalid QRBILL_DEFAULT_VERSION '{version}', using '{DEFAULT_VERSION}'")
        return DEFAULT_VERSION
    return version


def get_log_level() -> int:
    """Get logging level from QRBILL_LOG_LEVEL (default WARNING)."""
    name = os.getenv('QRBILL_LOG_LEVEL', DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        logger.warning(f"Invalid QRBILL_LOG_LEVEL '{name}', using '{DEFAULT_LOG_LEVEL}'")
        return logging.WARNING
    return level


def get_profiles_dir() -> Path:
    """Get directory containing bill profile YAML files.

    Returns:
        Path from QRBILL_PROFILES_DIR, default: configs/profiles under the project root
    """
    env_path = os.getenv('QRBILL_PROFILES_DIR')
    if env_path:
        return Path(env_path)
    return Path(__file__).resolve().parent.parent.parent / "configs" / "profiles"
