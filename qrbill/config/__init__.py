"""Configuration package."""

from .settings import (
    get_app_name,
    get_app_version,
    get_default_version,
    get_log_level,
    get_profiles_dir,
    get_strict_mode,
)

__all__ = [
    'get_app_name',
    'get_app_version',
    'get_default_version',
    'get_log_level',
    'get_profiles_dir',
    'get_strict_mode',
]
