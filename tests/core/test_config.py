"""Unit tests for chess_bridge/core/config.py"""

import logging

import pytest

from chess_bridge.core.config import (
    BridgeConfig,
    configure_logging,
    get_config,
    load_config,
)


def test_defaults() -> None:
    config = load_config({})
    assert config == BridgeConfig()
    assert config.effective_log_level == logging.WARNING
    assert config.move_log_sample == 5


def test_values_from_environment() -> None:
    config = load_config(
        {
            "CHESS_BRIDGE_LOG_LEVEL": "info",
            "CHESS_BRIDGE_MOVE_LOG_SAMPLE": "12",
        }
    )
    assert config.effective_log_level == logging.INFO
    assert config.move_log_sample == 12
    assert not config.debug


@pytest.mark.parametrize("flag", ["1", "true", "YES"])
def test_debug_flag_forces_debug_level(flag: str) -> None:
    config = load_config({"CHESS_BRIDGE_DEBUG": flag, "CHESS_BRIDGE_LOG_LEVEL": "ERROR"})
    assert config.debug
    assert config.effective_log_level == logging.DEBUG


def test_garbage_values_fall_back_to_defaults() -> None:
    config = load_config(
        {"CHESS_BRIDGE_LOG_LEVEL": "chatty", "CHESS_BRIDGE_MOVE_LOG_SAMPLE": "-3"}
    )
    assert config.effective_log_level == logging.WARNING
    assert config.move_log_sample == 5


def test_get_config_reads_os_environ(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHESS_BRIDGE_MOVE_LOG_SAMPLE", "7")
    assert get_config().move_log_sample == 7
    # cached until cleared
    monkeypatch.setenv("CHESS_BRIDGE_MOVE_LOG_SAMPLE", "9")
    assert get_config().move_log_sample == 7


def test_configure_logging_sets_package_level() -> None:
    configure_logging(BridgeConfig(log_level="ERROR"))
    assert logging.getLogger("chess_bridge").level == logging.ERROR

    configure_logging(BridgeConfig(debug=True))
    assert logging.getLogger("chess_bridge").level == logging.DEBUG
