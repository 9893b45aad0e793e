from .converters import CONVERTERS, get_converter
from .loader import ConfigError, ImportConfig, load_config, parse_config

__all__ = [
    "CONVERTERS",
    "ConfigError",
    "ImportConfig",
    "get_converter",
    "load_config",
    "parse_config",
]
