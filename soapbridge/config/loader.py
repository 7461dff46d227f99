"""Configuration loading utilities."""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from soapbridge.config.schema import ClientConfig
from soapbridge.utils.exceptions import ConfigurationError


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".soapbridge" / "config.json"


def load_config(config_path: Path | None = None, **overrides: Any) -> ClientConfig:
    """
    Load configuration from file, falling back to defaults and environment.

    Args:
        config_path: Optional path to config file. Uses default if not provided.
        overrides: Field values that win over the file.

    Returns:
        Loaded configuration object.
    """
    path = config_path or get_config_path()
    data: dict[str, Any] = {}

    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                raw = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise ConfigurationError(
                f"Failed to load config from {path}: {e}. "
                "Fix the file or remove it to use defaults."
            ) from e
        if not isinstance(raw, dict):
            raise ConfigurationError(f"Config file must be a JSON object: {path}")
        data = convert_keys(raw)

    data.update(overrides)
    allowed = set(ClientConfig.model_fields)
    data = {k: v for k, v in data.items() if k in allowed}
    return build_config(data, source=str(path))


def build_config(data: dict[str, Any], source: str = "arguments") -> ClientConfig:
    """Validate config values, reporting failures as ConfigurationError."""
    try:
        return ClientConfig(**data)
    except ValidationError as e:
        errors = e.errors()
        field = str(errors[0]["loc"][0]) if errors and errors[0].get("loc") else None
        raise ConfigurationError(f"Invalid config in {source}: {e}", field=field) from e


def convert_keys(data: Any) -> Any:
    """Convert camelCase keys to snake_case for Pydantic."""
    if isinstance(data, dict):
        return {camel_to_snake(k): convert_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_keys(item) for item in data]
    return data


def camel_to_snake(name: str) -> str:
    """Convert camelCase to snake_case."""
    result = []
    for i, char in enumerate(name):
        if char.isupper() and i > 0:
            result.append("_")
        result.append(char.lower())
    return "".join(result)
