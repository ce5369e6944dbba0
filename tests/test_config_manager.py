"""
Configuration and logging setup tests
"""

import logging
import math
from logging.handlers import RotatingFileHandler

import pytest
import yaml

from filter_explorer.complex_number import Complex
from filter_explorer.core.config_manager import (
    ConfigurationError, ConfigurationManager, Environment, ExplorerConfiguration,
    PresetDefaults, configure_logging, exponential_scale
)
from filter_explorer.interfaces import Butterworth, Comb, FilterFamily, MovingAverage


def write_config(tmp_path, name, data):
    config_dir = tmp_path / "config"
    config_dir.mkdir(exist_ok=True)
    (config_dir / name).write_text(yaml.safe_dump(data), encoding='utf-8')


class TestExplorerConfiguration:
    """Test configuration model defaults and validation"""

    def test_defaults(self):
        config = ExplorerConfiguration()
        assert config.log_level == "INFO"
        assert config.sample_rate == 44100
        assert config.block_size == 2048
        assert config.response_points == 196
        assert config.snap_size == pytest.approx(0.03)
        assert config.max_pole_modulus == pytest.approx(1.0 - Complex.EPSILON)
        assert config.strict_stability is False

    def test_log_level_is_normalized(self):
        assert ExplorerConfiguration(log_level="debug").log_level == "DEBUG"

    @pytest.mark.parametrize("overrides", [
        {"log_level": "CHATTY"},
        {"block_size": 0},
        {"sample_rate": -1},
        {"max_pole_modulus": 1.0},
        {"snap_size": -0.1},
        {"presets": {"cutoff": 4.0}},
    ])
    def test_invalid_values(self, overrides):
        assert not ConfigurationManager().validate_configuration(overrides)

    def test_presets_are_not_shared(self):
        first = ExplorerConfiguration()
        second = ExplorerConfiguration()
        assert first.presets is not second.presets


class TestPresetDefaults:
    """Test preset defaults"""

    def test_exponential_scale(self):
        assert exponential_scale(0.0) == pytest.approx(0.0)
        assert exponential_scale(1.0) == pytest.approx(1.0)
        assert exponential_scale(0.5) == pytest.approx((math.sqrt(50) - 1) / 49)

    def test_build_every_family(self):
        defaults = PresetDefaults()
        for family in FilterFamily:
            assert defaults.build(family).family is family

    def test_build_uses_defaults(self):
        defaults = PresetDefaults(butterworth_order=3, comb_delay=5, moving_average_order=2)
        assert defaults.build(FilterFamily.BUTTERWORTH) == Butterworth(defaults.cutoff, 3, True)
        assert defaults.build(FilterFamily.COMB) == Comb(-0.9, 5, True)
        assert defaults.build(FilterFamily.MOVING_AVERAGE) == MovingAverage(2)


class TestConfigurationManager:
    """Test layered configuration loading"""

    def test_missing_files_give_defaults(self, tmp_path):
        config = ConfigurationManager(tmp_path).load_configuration()
        assert config == ExplorerConfiguration()

    def test_load_default_file(self, tmp_path):
        write_config(tmp_path, "default.yaml", {
            "sample_rate": 48000,
            "presets": {"comb_delay": 4}
        })
        config = ConfigurationManager(tmp_path).load_configuration()
        assert config.sample_rate == 48000
        assert config.presets.comb_delay == 4
        assert config.presets.butterworth_order == 6

    def test_environment_file_is_merged(self, tmp_path, monkeypatch):
        write_config(tmp_path, "default.yaml", {"block_size": 1024, "presets": {"comb_delay": 4}})
        write_config(tmp_path, "testing.yaml", {"block_size": 512, "presets": {"bessel_order": 5}})
        monkeypatch.setenv("FILTER_EXPLORER_ENVIRONMENT", "testing")

        manager = ConfigurationManager(tmp_path)
        config = manager.load_configuration()
        assert manager.environment is Environment.TESTING
        assert config.block_size == 512
        assert config.presets.comb_delay == 4
        assert config.presets.bessel_order == 5

    def test_unknown_environment_falls_back(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FILTER_EXPLORER_ENVIRONMENT", "staging")
        assert ConfigurationManager(tmp_path).environment is Environment.DEVELOPMENT

    def test_environment_variables_win(self, tmp_path, monkeypatch):
        write_config(tmp_path, "default.yaml", {"sample_rate": 48000})
        monkeypatch.setenv("FILTER_EXPLORER_SAMPLE_RATE", "22050")
        monkeypatch.setenv("FILTER_EXPLORER_STRICT_STABILITY", "yes")
        monkeypatch.setenv("FILTER_EXPLORER_LOG_LEVEL", "warning")

        config = ConfigurationManager(tmp_path).load_configuration()
        assert config.sample_rate == 22050
        assert config.strict_stability is True
        assert config.log_level == "WARNING"

    def test_malformed_integer_variable_is_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FILTER_EXPLORER_BLOCK_SIZE", "lots")
        assert ConfigurationManager(tmp_path).load_configuration().block_size == 2048

    def test_invalid_value_raises(self, tmp_path):
        write_config(tmp_path, "default.yaml", {"log_level": "CHATTY"})
        with pytest.raises(ConfigurationError):
            ConfigurationManager(tmp_path).load_configuration()

    def test_non_mapping_file_raises(self, tmp_path):
        write_config(tmp_path, "default.yaml", [1, 2, 3])
        with pytest.raises(ConfigurationError):
            ConfigurationManager(tmp_path).load_configuration()

    def test_broken_yaml_raises(self, tmp_path):
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "default.yaml").write_text("sample_rate: [48000\n", encoding='utf-8')
        with pytest.raises(ConfigurationError):
            ConfigurationManager(tmp_path).load_configuration()

    def test_get_config_value(self, tmp_path):
        write_config(tmp_path, "default.yaml", {"presets": {"comb_delay": 4}})
        manager = ConfigurationManager(tmp_path)
        assert manager.get_config_value("presets.comb_delay") == 4
        assert manager.get_config_value("sample_rate") == 44100
        assert manager.get_config_value("presets.missing", "fallback") == "fallback"

    def test_reload_configuration(self, tmp_path):
        manager = ConfigurationManager(tmp_path)
        assert manager.get_configuration().sample_rate == 44100

        write_config(tmp_path, "default.yaml", {"sample_rate": 96000})
        assert manager.get_configuration().sample_rate == 44100
        assert manager.reload_configuration().sample_rate == 96000


class TestConfigureLogging:
    """Test package log handler setup"""

    def test_stream_handler_only(self):
        package_logger = configure_logging(ExplorerConfiguration(log_level="DEBUG"))
        assert package_logger.name == 'filter_explorer'
        assert package_logger.level == logging.DEBUG
        assert len(package_logger.handlers) == 1

    def test_rotating_file_handler(self, tmp_path):
        log_file = tmp_path / "explorer.log"
        config = ExplorerConfiguration(log_file_path=str(log_file), log_backup_count=2)
        package_logger = configure_logging(config)

        file_handlers = [h for h in package_logger.handlers if isinstance(h, RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].backupCount == 2

        logging.getLogger('filter_explorer.tests').info("hello")
        file_handlers[0].flush()
        assert "hello" in log_file.read_text(encoding='utf-8')

    def test_reconfiguring_replaces_handlers(self):
        configure_logging(ExplorerConfiguration())
        package_logger = configure_logging(ExplorerConfiguration())
        assert len(package_logger.handlers) == 1
