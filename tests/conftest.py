"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator

import pytest

from chess_bridge.core.config import BridgeConfig, get_config
from chess_bridge.services.game_session import GameSession


@pytest.fixture
def config() -> BridgeConfig:
    return BridgeConfig(log_level="DEBUG", move_log_sample=3)


@pytest.fixture
def session(config: BridgeConfig) -> GameSession:
    """Fresh session at the standard starting position."""
    return GameSession(config=config)


@pytest.fixture(autouse=True)
def clear_config_cache() -> Generator[None, None, None]:
    """get_config is cached per process. Tests that touch the environment should not leak into each other."""
    get_config.cache_clear()
    try:
        yield
    finally:
        get_config.cache_clear()
