"""Shared pytest fixtures for FreeFlow tests.

Fixtures:
    - host: Fresh virtual clock
    - fixed_variant: 2-minute dive, one bubble per second
    - decay_variant: Reference 40-minute decay dive
    - mock_config: Test configuration with temp paths
    - clean_logging: Resets the freeflow logger around a test
"""

import logging
from pathlib import Path
from typing import Generator

import pytest

from freeflow.core.config import Config, reset_config
from freeflow.core.timers import VirtualTimerHost
from freeflow.engine.variants import PatternKind, VariantConfig, get_variant


@pytest.fixture
def host() -> VirtualTimerHost:
    """Virtual clock starting at t=0."""
    return VirtualTimerHost()


@pytest.fixture
def fixed_variant() -> VariantConfig:
    """Short fixed-cadence dive: 120s, a bubble every second, 5s lifetime."""
    return VariantConfig(
        name="test-fixed",
        description="Test dive",
        pattern=PatternKind.FIXED,
        fixed_interval=1.0,
        session_duration=120.0,
    )


@pytest.fixture
def decay_variant() -> VariantConfig:
    """The reference 40-minute decay variant."""
    return get_variant("decay")


@pytest.fixture
def mock_config(tmp_path: Path) -> Config:
    """Test configuration with temp paths."""
    return Config(
        log_path=tmp_path / "logs",
        variant="decay",
        debug=True,
    )


@pytest.fixture
def clean_logging() -> Generator[None, None, None]:
    """Let a test call setup_logging() and leave no handlers behind."""
    import freeflow.core.logging as log_module

    log_module._logging_initialized = False
    yield
    root_logger = logging.getLogger(log_module.ROOT_LOGGER_NAME)
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)
    log_module._logging_initialized = False


@pytest.fixture(autouse=True)
def _fresh_config() -> Generator[None, None, None]:
    """Never leak the cached config singleton between tests."""
    reset_config()
    yield
    reset_config()


# Markers for different test types
def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "realtime: marks tests that sleep on the wall clock")
