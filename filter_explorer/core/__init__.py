"""
Core Infrastructure for Filter Explorer

Configuration loading and logging setup shared by the engine, the editor
and the command line front end.
"""

from .config_manager import (
    ConfigurationManager, ConfigurationError, Environment, ExplorerConfiguration,
    PresetDefaults, configure_logging, exponential_scale, get_config, get_config_manager
)

__all__ = [
    'ConfigurationManager',
    'ConfigurationError',
    'Environment',
    'ExplorerConfiguration',
    'PresetDefaults',
    'configure_logging',
    'exponential_scale',
    'get_config',
    'get_config_manager'
]
