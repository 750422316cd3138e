"""Tests for keypad events."""

import pytest
from chipvm import press_key, release_key, KEY_LAYOUT, execute


def test_layout_covers_all_keys():
    assert sorted(KEY_LAYOUT.values()) == list(range(16))
    assert len(KEY_LAYOUT) == 16


@pytest.mark.parametrize("name,key", [("1", 0x1), ("4", 0xC), ("q", 0x4), ("x", 0x0), ("v", 0xF)])
def test_layout_positions(name, key):
    assert KEY_LAYOUT[name] == key


def test_press_and_release(fresh_state):
    state = press_key(fresh_state, 0xA)
    assert state.keypad[0xA]
    assert state.keypad.sum() == 1

    state = release_key(state, 0xA)
    assert not state.keypad.any()


def test_press_without_wait_keeps_registers(fresh_state):
    state = press_key(fresh_state, 0x5)
    assert not state.V.any()
    assert not state.waiting


def test_press_resolves_wait(fresh_state):
    state = execute(fresh_state, 0xF70A)
    state = press_key(state, 0xE)

    assert state.V[7] == 0xE
    assert not state.waiting
    assert state.keypad[0xE]


def test_release_does_not_resolve_wait(fresh_state):
    state = execute(fresh_state, 0xF70A)
    state = release_key(state, 0x2)

    assert state.waiting
    assert state.V[7] == 0


def test_multiple_keys_held(fresh_state):
    state = press_key(fresh_state, 0x1)
    state = press_key(state, 0xF)
    state = release_key(state, 0x1)

    assert not state.keypad[0x1]
    assert state.keypad[0xF]
