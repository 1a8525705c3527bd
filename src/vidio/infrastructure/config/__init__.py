from __future__ import annotations

from .load import load_config
from .schema import AppConfig, EnvOverrides

__all__ = ["AppConfig", "EnvOverrides", "load_config"]
