"""YAML configuration loading for the snapshot collector."""

import os
import re
from pathlib import Path
from typing import Any, Optional

import yaml

from .models import YbSnapConfig

# ${NAME} or ${NAME:-fallback}
ENV_PLACEHOLDER = re.compile(r'\$\{(\w+)(?::-([^}]*))?\}')


def expand_env(value: Any) -> Any:
    """
    Replace ${NAME} and ${NAME:-fallback} placeholders in every string of a
    parsed YAML document. Unset variables without a fallback become "".
    """
    if isinstance(value, str):
        return ENV_PLACEHOLDER.sub(lambda m: os.getenv(m.group(1), m.group(2) or ''), value)
    if isinstance(value, dict):
        return {key: expand_env(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env(item) for item in value]
    return value


class ConfigLoader:
    """Build a validated YbSnapConfig from an optional YAML file."""

    @staticmethod
    def load(config_path: Optional[str] = None) -> YbSnapConfig:
        """
        Load configuration, falling back to defaults when no path is given.

        Args:
            config_path: Path to a YAML file, or None/"" for defaults

        Returns:
            YbSnapConfig: Validated configuration

        Raises:
            FileNotFoundError: If config_path names a missing file
            yaml.YAMLError: If the file is not valid YAML
            pydantic.ValidationError: If a value is out of range
        """
        if not config_path:
            return YbSnapConfig()
        return ConfigLoader.load_from_file(config_path)

    @staticmethod
    def load_from_file(config_path: str) -> YbSnapConfig:
        config_file = Path(config_path)
        if not config_file.is_file():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        document = yaml.safe_load(config_file.read_text()) or {}
        if not isinstance(document, dict):
            raise ValueError(f"Configuration must be a YAML mapping: {config_path}")

        return YbSnapConfig.model_validate(expand_env(document))
