"""Configuration loading, merging, and normalization for Passtype.

This package facade re-exports all public names so that callers can use
``from passtype.config import ...``.
"""

from __future__ import annotations

from passtype.config.loader import build_config, default_config_path, load_config, scaffold_config
from passtype.config.merge import deep_merge, interpolate_env
from passtype.config.model import (
    AttributeKeys,
    CacheConfig,
    ClipboardConfig,
    Keybinding,
    PasstypeConfig,
    PickerConfig,
    StoreConfig,
)

__all__ = [
    "AttributeKeys",
    "CacheConfig",
    "ClipboardConfig",
    "Keybinding",
    "PasstypeConfig",
    "PickerConfig",
    "StoreConfig",
    "build_config",
    "deep_merge",
    "default_config_path",
    "interpolate_env",
    "load_config",
    "scaffold_config",
]
