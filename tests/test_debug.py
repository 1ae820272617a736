"""Tests for the DebugManager logging wrapper."""

import logging

import pytest

from connect_four.debug import DebugManager, DebugLevel


@pytest.fixture
def manager():
    m = DebugManager(name="connect_four.test")
    m.configure(level=DebugLevel.DEBUG)
    return m


def test_level_from_string():
    assert DebugLevel.from_string("Trace") == DebugLevel.TRACE
    with pytest.raises(ValueError):
        DebugLevel.from_string("loud")


def test_messages_below_level_are_dropped(manager, caplog):
    manager.configure(level=DebugLevel.WARNING)
    with caplog.at_level(logging.DEBUG, logger="connect_four.test"):
        manager.info("hidden", "board")
        manager.warning("shown", "board")
    assert [r.getMessage() for r in caplog.records] == ["[board] shown"]


def test_component_filter(manager, caplog):
    manager.configure(components=["board"])
    with caplog.at_level(logging.DEBUG, logger="connect_four.test"):
        manager.debug("kept", "board")
        manager.debug("dropped", "events")
    assert [r.getMessage() for r in caplog.records] == ["[board] kept"]


def test_disabled_and_none_level(manager):
    manager.configure(enabled=False)
    assert not manager.is_enabled_for(DebugLevel.ERROR)
    manager.configure(enabled=True, level=DebugLevel.NONE)
    assert not manager.is_enabled_for(DebugLevel.ERROR)


def test_unknown_level_string_keeps_level(manager):
    manager.set_from_string("loud")
    assert manager.level == DebugLevel.DEBUG


def test_timer(manager):
    manager.start_timer("scan")
    assert manager.end_timer("scan") >= 0
    assert manager.end_timer("scan") is None


def test_log_file(manager, tmp_path):
    path = tmp_path / "game.log"
    manager.configure(log_file=str(path))
    manager.error("written", "cli")
    manager.configure(log_file="")
    assert "[cli] written" in path.read_text()
