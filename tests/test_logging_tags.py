"""Tests for colour handling and log tags in session and pursuit output."""

from __future__ import annotations

import contextlib
import io
import random

from mazechase.config import GameSettings
from mazechase.environment import Grid
from mazechase.logging_utils import (
    LOG_TAG_DETERMINISTIC,
    LOG_TAG_ERROR,
    Color,
    colored,
    log_error,
    log_success,
    verbose_enabled,
)
from mazechase.motion import Position
from mazechase.pursuit import next_step
from mazechase.session import SessionState


def test_colored_wraps_text(monkeypatch):
    monkeypatch.delenv("MAZECHASE_NO_COLOR", raising=False)
    assert colored("hi", Color.GREEN) == "\033[92mhi\033[0m"
    assert colored("hi", Color.RED, bold=True) == "\033[1m\033[91mhi\033[0m"


def test_no_color_env_disables_ansi(monkeypatch):
    monkeypatch.setenv("MAZECHASE_NO_COLOR", "1")
    assert colored("hi", Color.BLUE) == "hi"

    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        log_success("[✓] done")
    assert buf.getvalue() == "[✓] done\n"


def test_verbose_flag(monkeypatch):
    monkeypatch.delenv("MAZECHASE_VERBOSE", raising=False)
    assert verbose_enabled() is False

    for value in ("1", "true", "YES"):
        monkeypatch.setenv("MAZECHASE_VERBOSE", value)
        assert verbose_enabled() is True

    monkeypatch.setenv("MAZECHASE_VERBOSE", "0")
    assert verbose_enabled() is False


def test_pursuit_anomaly_uses_error_tag(monkeypatch):
    monkeypatch.delenv("MAZECHASE_NO_COLOR", raising=False)
    grid = Grid.from_ascii([
        "#######",
        "#  #  #",
        "#######",
    ])

    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        next_step(grid, (1, 1), (4, 1))
    out = buf.getvalue()

    assert f"{LOG_TAG_ERROR} [Pursuit] No path" in out
    assert out.startswith(Color.RED.value)


def test_log_error_plain(monkeypatch):
    monkeypatch.setenv("MAZECHASE_NO_COLOR", "yes")
    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        log_error("  [!] broken")
    assert buf.getvalue() == "  [!] broken\n"


def test_verbose_key_pickup_is_a_blue_tick_event(monkeypatch):
    monkeypatch.delenv("MAZECHASE_NO_COLOR", raising=False)
    monkeypatch.setenv("MAZECHASE_VERBOSE", "1")
    session = SessionState(GameSettings(random_turn_chance=0.0), rng=random.Random(0))
    session.restart(grid=Grid.from_ascii([
        "#####",
        "#k. #",
        "#####",
    ]))
    session.player = Position(1.0, 1.0)
    session.pursuers = []

    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        session.step(1 / 60)
    out = buf.getvalue()

    assert out.startswith(Color.BLUE.value)
    assert f"{LOG_TAG_DETERMINISTIC} [Session] Key collected at (1, 1); pursuer speed x1.0500" in out
