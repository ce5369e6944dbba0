"""
Shared fixtures for the Filter Explorer test suite
"""

import logging
import os

import pytest

from filter_explorer.core.config_manager import ConfigurationManager
from filter_explorer.filters.digital_filter import DigitalFilter
from filter_explorer.filters.design.presets import leaky_integrator


@pytest.fixture
def identity_filter():
    """Engine with no zeros and no poles"""
    return DigitalFilter()


@pytest.fixture
def leaky_filter():
    """Leaky integrator with lambda = 0.5"""
    return DigitalFilter(leaky_integrator(0.5))


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep FILTER_EXPLORER_* variables of the host out of the tests"""
    for name in list(os.environ):
        if name.startswith(ConfigurationManager.ENV_PREFIX):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by configure_logging during a test"""
    yield
    package_logger = logging.getLogger('filter_explorer')
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
