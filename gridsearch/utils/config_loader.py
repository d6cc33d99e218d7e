"""
Configuration loader for the grid pathfinding engine.
Loads the engine configuration from YAML and validates it into EngineConfig.
"""

import yaml
from pathlib import Path
from typing import Optional

from config.schemas import EngineConfig
from config.settings import ENGINE_CONFIG_FILE

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"

class ConfigLoader:
    """simplified config loader - load yaml file to EngineConfig"""

    def __init__(self, config_dir=DEFAULT_CONFIG_DIR):
        self.config_dir = Path(config_dir)

    def load_engine_config(self, file_name: str = ENGINE_CONFIG_FILE) -> EngineConfig:
        """load engine configuration from yaml file"""
        config_file = self.config_dir / file_name

        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f) or {}

        if not isinstance(config, dict):
            raise ValueError(f"Engine configuration must be a mapping: {config_file}")

        return EngineConfig(**config)

# global config loader instance
_config_loader: Optional[ConfigLoader] = None

def get_config_loader() -> ConfigLoader:
    """get global config loader instance"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader

def load_engine_config() -> EngineConfig:
    """convenient function - load engine config"""
    return get_config_loader().load_engine_config()
