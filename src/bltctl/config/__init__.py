"""Project configuration loading and lookup."""

from .loader import PROJECT_CONFIG, LOCAL_CONFIG, Config, load_config, parse_define

__all__ = ["Config", "LOCAL_CONFIG", "PROJECT_CONFIG", "load_config", "parse_define"]
