from __future__ import annotations

from .load import load_config
from .schema import AppConfig, EnvOverrides, VixSrcConfig

__all__ = ["AppConfig", "EnvOverrides", "VixSrcConfig", "load_config"]
