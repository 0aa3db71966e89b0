"""Configuration loading: YAML file, then environment overrides."""

import os
from pathlib import Path
from typing import Optional

import yaml

from .config_models import FitoxConfig

# Environment variable -> (section, field)
ENV_OVERRIDES = {
    "EMERGENT_LLM_KEY": ("llm", "api_key"),
    "OLLAMA_ENDPOINT": ("local_llm", "endpoint"),
    "OLLAMA_KEY_1": ("local_llm", "api_key"),
    "FITOX_DB_PATH": ("store", "db_path"),
    "FITOX_LOG_LEVEL": ("logging", "level"),
}


def find_config() -> Optional[Path]:
    """Find config file in standard locations."""
    locations = [
        Path.cwd() / "config.yaml",
        Path.home() / ".fitox" / "config.yaml",
        Path.home() / "fitox" / "config.yaml",
    ]
    for loc in locations:
        if loc.exists():
            return loc
    return None


def _apply_env(data: dict) -> dict:
    for env_var, (section, field) in ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value:
            data.setdefault(section, {})[field] = value
    return data


def load_config_model(config_path: Optional[Path] = None) -> FitoxConfig:
    """Load configuration as Pydantic model with validation."""
    base_config = {}

    path = config_path or find_config()
    if path and path.exists():
        try:
            with open(path) as f:
                base_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")

    try:
        return FitoxConfig.from_dict(_apply_env(base_config))
    except Exception as e:
        raise ValueError(f"Config validation failed: {e}")
