"""Configuration settings for the ICS generator."""

import os
from pathlib import Path
from zoneinfo import ZoneInfo
from zoneinfo import ZoneInfoNotFoundError

import yaml

from icsgen.config.env import EnvConfig
from icsgen.config.types import AppConfig
from icsgen.config.types import GlobalConfig
from icsgen.config.utils import deep_merge
from icsgen.config.utils import resolve_path
from icsgen.exceptions import ConfigError


class ConfigurationManager:
    """Centralized configuration management with caching."""
    
    _instance = None
    
    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance
    
    def __init__(self):
        if self._initialized:
            return
            
        self._config: AppConfig | None = None
        self._config_path: Path | None = None
        self._initialized = True
    
    @property
    def config(self) -> AppConfig:
        """Get the current configuration, loading it if necessary."""
        if self._config is None:
            return self.load_config()
        return self._config
    
    def load_config(self, config_dir: str | None = None) -> AppConfig:
        """Load configuration with caching."""
        if self._config is not None:
            return self._config
            
        self._config_path = _get_config_path(config_dir)
        global_config = _load_global_config(self._config_path)
        
        timezone = global_config['timezone']
        _validate_timezone(timezone)
        
        self._config = AppConfig(
            timezone=timezone,
            prodid=global_config['calendar']['prodid'],
            calendar_name=global_config['calendar']['name'],
            log_level=global_config['logging']['level'],
            log_file=global_config['logging'].get('file'),
            config_dir=str(self._config_path) if self._config_path else None
        )
        
        return self._config
    
    def reload_config(self, config_dir: str | None = None) -> AppConfig:
        """Force reload configuration."""
        self._config = None
        return self.load_config(config_dir)

def _get_config_path(config_dir: str | None = None) -> Path | None:
    """Get configuration directory path, if one is configured."""
    path = config_dir or os.getenv("ICSGEN_CONFIG_DIR")
    return resolve_path(path) if path else None

def _load_global_config(config_path: Path | None) -> GlobalConfig:
    """Load global configuration from environment and an optional YAML file."""
    global_config = EnvConfig.get_global_config()
    
    if config_path is None:
        return global_config
    
    config_file = config_path / "config.yaml"
    if config_file.exists():
        with open(config_file, encoding="utf-8") as f:
            try:
                loaded_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {config_file}", {"error": str(e)}) from e
        if not isinstance(loaded_config, dict):
            raise ConfigError(f"Expected a mapping in {config_file}")
        global_config = deep_merge(global_config, loaded_config)
    
    return global_config

def _validate_timezone(timezone: str) -> None:
    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"Invalid timezone {timezone}", {"timezone": timezone}) from e

def load_config(config_dir: str | None = None) -> AppConfig:
    """Load configuration using the ConfigurationManager."""
    config_manager = ConfigurationManager()
    return config_manager.load_config(config_dir)
