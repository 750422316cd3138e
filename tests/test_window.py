"""Tests for the pygame host that do not need a real display."""

import pygame
import pytest
from chipvm import Engine
from chipvm.window import KEY_MAP, handle_events
from conftest import assemble


@pytest.fixture
def headless_pygame(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    pygame.display.init()
    pygame.display.set_mode((1, 1))
    yield
    pygame.display.quit()


def test_key_map_covers_keypad():
    assert sorted(KEY_MAP.values()) == list(range(16))
    assert KEY_MAP[pygame.K_4] == 0xC
    assert KEY_MAP[pygame.K_x] == 0x0


def test_handle_key_events(headless_pygame):
    engine = Engine(assemble(0x1200))

    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_w))
    handle_events(engine)
    assert engine.state.keypad[0x5]

    pygame.event.post(pygame.event.Event(pygame.KEYUP, key=pygame.K_w))
    handle_events(engine)
    assert not engine.state.keypad[0x5]


def test_escape_stops_engine(headless_pygame):
    engine = Engine(assemble(0x1200))

    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
    handle_events(engine)

    assert engine.stopped
