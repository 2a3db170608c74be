"""
Tests for global poller configuration and poller setup helpers.
"""

from __future__ import annotations

import io
import logging

import pytest

from pollbar.progress.config import (
    PollerConfig, clamp_interval, get_config, set_config, update_config
)
from pollbar.progress.core.bar import Bar
from pollbar.progress.core.poller import Poller, ShowResult
from pollbar.progress.display.terminal import TerminalMode
from pollbar.progress.utils import create_poller, parse_terminal_mode


def test_defaults() -> None:
    config = get_config()

    assert config.default_interval == 0.1
    assert config.min_interval == 0.01
    assert config.terminal_mode == TerminalMode.AUTO
    assert config.flush_each_pass is True


def test_update_config_rejects_unknown_option() -> None:
    with pytest.raises(ValueError):
        update_config(refresh_rate=4)


def test_update_config_changes_poller_defaults() -> None:
    update_config(default_interval=0.25)

    assert Poller().interval == 0.25


def test_set_config_replaces_instance() -> None:
    config = PollerConfig(min_interval=0.05)
    set_config(config)

    assert get_config() is config
    assert clamp_interval(0.01) == 0.05


def test_clamp_interval_rejects_non_positive() -> None:
    with pytest.raises(ValueError):
        clamp_interval(-1)


@pytest.mark.parametrize("seconds", [float("nan"), float("inf")])
def test_clamp_interval_rejects_non_finite(seconds: float) -> None:
    with pytest.raises(ValueError):
        clamp_interval(seconds)
    with pytest.raises(ValueError):
        Poller(0.1, io.StringIO()).set_interval(seconds)


def test_configured_terminal_mode_used_when_poller_has_none() -> None:
    update_config(terminal_mode=TerminalMode.OFF)
    out = io.StringIO()
    bar = Bar(1, lambda b: "line")
    bar.advance()

    assert Poller(0.01, out).add(bar).show() == ShowResult.FINISHED
    assert out.getvalue() == "line\n"


def test_flush_each_pass_can_be_disabled() -> None:
    update_config(flush_each_pass=False)

    class Sink(io.StringIO):
        flushed = False

        def flush(self) -> None:
            self.flushed = True

    out = Sink()
    Poller(0.01, out, TerminalMode.OFF).show()

    assert out.flushed is False


def test_parse_terminal_mode_falls_back_to_auto(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        assert parse_terminal_mode("sometimes") == TerminalMode.AUTO

    assert "Invalid terminal mode" in caplog.text
    assert parse_terminal_mode("OFF") == TerminalMode.OFF


def test_create_poller() -> None:
    out = io.StringIO()
    poller = create_poller(0.5, "on", out)

    assert poller.interval == 0.5
    assert poller.show() == ShowResult.FINISHED
    assert out.getvalue().startswith("\x1b7")
