"""Configuration package for the ICS generator."""

from icsgen.config.settings import ConfigurationManager, load_config
from icsgen.config.types import AppConfig

__all__ = ['AppConfig', 'ConfigurationManager', 'load_config']
