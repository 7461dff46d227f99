"""Configuration module for soapbridge."""

from soapbridge.config.loader import build_config, get_config_path, load_config
from soapbridge.config.schema import DEFAULT_CHARSET, DEFAULT_URL, PARAM_ACCESS_TOKEN, ClientConfig

__all__ = [
    "ClientConfig",
    "DEFAULT_CHARSET",
    "DEFAULT_URL",
    "PARAM_ACCESS_TOKEN",
    "build_config",
    "get_config_path",
    "load_config",
]
