"""
Configuration models for slug fields.
"""

from .models import (
    AutoUpdateConfig,
    ConfigError,
    InterfaceOptions,
    SlugFieldConfig,
    load_config,
)

__all__ = ["AutoUpdateConfig", "ConfigError", "InterfaceOptions", "SlugFieldConfig", "load_config"]
