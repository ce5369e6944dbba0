"""
Configuration Management System for Filter Explorer
"""

import logging
import math
import os
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from filter_explorer.complex_number import Complex
from filter_explorer.interfaces import (
    Bessel, Butterworth, ChebyshevI, Comb, FilterFamily, FilterPreset,
    LeakyIntegrator, MovingAverage
)

logger = logging.getLogger('filter_explorer.core.config_manager')

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

class Environment(Enum):
    """Supported deployment environments"""
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"

class ConfigurationError(Exception):
    """Raised when configuration is invalid or missing"""
    pass


def exponential_scale(x: float) -> float:
    """
    Map a linear slider position in [0, 1] onto an exponential scale.

    ``x -> (50^x - 1) / (50 - 1)``; used to turn slider positions into
    cutoff frequencies as a fraction of pi.
    """
    base = 50
    return (math.pow(base, x) - 1) / (base - 1)


class PresetDefaults(BaseModel):
    """Initial parameters of every preset family"""

    cutoff: float = math.pi * exponential_scale(0.5)
    lowpass: bool = True
    moving_average_order: int = 6
    leaky_integrator_lambda: float = 0.5
    butterworth_order: int = 6
    chebyshev_order: int = 4
    chebyshev_ripple: float = 0.5
    bessel_order: int = 3
    comb_alpha: float = -0.9
    comb_delay: int = 8
    comb_feedforward: bool = True

    @field_validator('cutoff')
    @classmethod
    def validate_cutoff(cls, v):
        if not 0.0 < v < math.pi:
            raise ValueError('cutoff must be between 0 and pi')
        return v

    def build(self, family: FilterFamily) -> FilterPreset:
        """Preset object for ``family`` with these default parameters"""
        builders = {
            FilterFamily.MOVING_AVERAGE: lambda: MovingAverage(self.moving_average_order),
            FilterFamily.LEAKY_INTEGRATOR: lambda: LeakyIntegrator(self.leaky_integrator_lambda),
            FilterFamily.BUTTERWORTH: lambda: Butterworth(self.cutoff, self.butterworth_order, self.lowpass),
            FilterFamily.CHEBYSHEV_I: lambda: ChebyshevI(self.cutoff, self.chebyshev_order,
                                                         self.chebyshev_ripple, self.lowpass),
            FilterFamily.BESSEL: lambda: Bessel(self.cutoff, self.bessel_order, self.lowpass),
            FilterFamily.COMB: lambda: Comb(self.comb_alpha, self.comb_delay, self.comb_feedforward),
        }
        return builders[family]()


class ExplorerConfiguration(BaseModel):
    """Main application configuration model with Pydantic validation"""

    # Logging Configuration
    log_level: str = "INFO"
    log_file_path: Optional[str] = None
    log_max_bytes: int = 8 * 1024 * 1024  # 8MB
    log_backup_count: int = 3

    # Audio Configuration
    sample_rate: int = 44100
    block_size: int = 2048

    # Display Configuration
    response_points: int = 196

    # Editing Configuration
    snap_size: float = 0.03
    max_pole_modulus: float = 1.0 - Complex.EPSILON
    hit_tolerance: float = 1.0 / 86
    strict_stability: bool = False

    presets: PresetDefaults = Field(default_factory=PresetDefaults)

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'log_level must be one of {valid_levels}')
        return v.upper()

    @field_validator('sample_rate', 'block_size', 'response_points')
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError('must be positive')
        return v

    @field_validator('max_pole_modulus')
    @classmethod
    def validate_max_pole_modulus(cls, v):
        if not 0.0 < v < 1.0:
            raise ValueError('max_pole_modulus must be between 0 and 1 (exclusive)')
        return v

    @field_validator('snap_size', 'hit_tolerance')
    @classmethod
    def validate_non_negative(cls, v):
        if v < 0:
            raise ValueError('must not be negative')
        return v


class ConfigurationManager:
    """
    Centralized configuration management system.

    Loads ``config/default.yaml``, applies ``config/<environment>.yaml`` on
    top of it and finally environment variable overrides.
    """

    ENV_PREFIX = 'FILTER_EXPLORER_'

    def __init__(self, base_path: Optional[Path] = None):
        self.base_path = base_path or Path.cwd()
        self.config_dir = self.base_path / "config"
        self.environment = self._detect_environment()
        self._configuration: Optional[ExplorerConfiguration] = None

        logger.info(f"ConfigurationManager initialized for environment: {self.environment.value}")

    def load_configuration(self) -> ExplorerConfiguration:
        """
        Load and validate configuration from all sources.

        Returns:
            Validated configuration object

        Raises:
            ConfigurationError: If configuration is invalid
        """
        try:
            config_data = self._load_yaml_file(self.config_dir / "default.yaml")

            config_data = self._apply_environment_overrides(config_data)

            config_data = self._apply_environment_variables(config_data)

            self._configuration = ExplorerConfiguration(**config_data)

            logger.info("Configuration loaded successfully")
            return self._configuration

        except (ValidationError, yaml.YAMLError, TypeError) as e:
            logger.error(f"Failed to load configuration: {e}")
            raise ConfigurationError(f"Configuration loading failed: {e}") from e

    def get_configuration(self) -> ExplorerConfiguration:
        """Get current configuration, loading if necessary"""
        if self._configuration is None:
            return self.load_configuration()
        return self._configuration

    def reload_configuration(self) -> ExplorerConfiguration:
        """Reload configuration from sources"""
        self._configuration = None
        return self.load_configuration()

    def get_config_value(self, key: str, default: Any = None) -> Any:
        """
        Get a specific configuration value with dot notation support.

        Args:
            key: Configuration key (supports dot notation like 'presets.comb_delay')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        value: Any = self.get_configuration()

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            elif hasattr(value, k):
                value = getattr(value, k)
            else:
                return default
        return value

    def validate_configuration(self, config_data: Dict[str, Any]) -> bool:
        """
        Validate configuration data without loading.

        Args:
            config_data: Configuration dictionary to validate

        Returns:
            True if valid, False otherwise
        """
        try:
            ExplorerConfiguration(**config_data)
            return True
        except (ValidationError, TypeError):
            return False

    def _detect_environment(self) -> Environment:
        """Detect current environment from the environment variable"""
        env_var = os.getenv(f'{self.ENV_PREFIX}ENVIRONMENT', '').lower()
        if env_var:
            try:
                return Environment(env_var)
            except ValueError:
                logger.warning(f"Unknown environment '{env_var}', using development")

        return Environment.DEVELOPMENT

    def _apply_environment_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment-specific configuration overrides"""
        env_config_path = self.config_dir / f"{self.environment.value}.yaml"
        env_config = self._load_yaml_file(env_config_path)
        if env_config:
            config_data = self._deep_merge(config_data, env_config)
            logger.debug(f"Applied environment overrides from {env_config_path}")

        return config_data

    def _apply_environment_variables(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides"""
        env_mappings = {
            'LOG_LEVEL': ('log_level', str),
            'LOG_FILE_PATH': ('log_file_path', str),
            'SAMPLE_RATE': ('sample_rate', int),
            'BLOCK_SIZE': ('block_size', int),
            'RESPONSE_POINTS': ('response_points', int),
            'STRICT_STABILITY': ('strict_stability', bool),
        }

        for env_name, (config_key, value_type) in env_mappings.items():
            env_var = f'{self.ENV_PREFIX}{env_name}'
            env_value = os.getenv(env_var)
            if env_value is None:
                continue

            if value_type is int:
                try:
                    config_data[config_key] = int(env_value)
                except ValueError:
                    logger.warning(f"Invalid integer value for {env_var}: {env_value}")
                    continue
            elif value_type is bool:
                config_data[config_key] = env_value.lower() in ('true', '1', 'yes', 'on')
            else:
                config_data[config_key] = env_value

            logger.debug(f"Applied environment variable {env_var} -> {config_key}")

        return config_data

    def _load_yaml_file(self, path: Path) -> Dict[str, Any]:
        """Load configuration from YAML file; missing files yield no settings"""
        if not path.exists():
            return {}

        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {path} must contain a mapping")

        logger.debug(f"Loaded configuration from {path}")
        return data

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries"""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def configure_logging(config: ExplorerConfiguration) -> logging.Logger:
    """
    Install log handlers on the package logger.

    Args:
        config: Configuration providing level and optional log file

    Returns:
        The ``filter_explorer`` logger
    """
    package_logger = logging.getLogger('filter_explorer')
    package_logger.setLevel(config.log_level)

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    package_logger.addHandler(stream_handler)

    if config.log_file_path:
        file_handler = RotatingFileHandler(
            config.log_file_path,
            maxBytes=config.log_max_bytes,
            backupCount=config.log_backup_count,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    return package_logger


# Global configuration manager instance
_global_config_manager: Optional[ConfigurationManager] = None

def get_config_manager() -> ConfigurationManager:
    """Get the global configuration manager instance"""
    global _global_config_manager
    if _global_config_manager is None:
        _global_config_manager = ConfigurationManager()
    return _global_config_manager

def get_config() -> ExplorerConfiguration:
    """Get the current configuration"""
    return get_config_manager().get_configuration()
