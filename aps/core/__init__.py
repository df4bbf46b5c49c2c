"""Core modules for aps"""

from .config import Config, ConfigError, load_config
from .operations import ALIASES, Operation, lookup
from .runner import Runner

__all__ = ['Config', 'ConfigError', 'load_config', 'ALIASES', 'Operation', 'lookup', 'Runner']
