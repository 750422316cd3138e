"""Tests for system instructions (0xxx)."""

import jax.numpy as jnp
from chipvm import execute, set_pixel, get_display
from chipvm.constants import FAULT_NONE, FAULT_STACK_UNDERFLOW


def test_execute_clear_screen(fresh_state):
    """Test 00E0 - Clear display."""
    state = set_pixel(fresh_state, 0, 0, True)
    state = set_pixel(state, 63, 31, True)

    state = execute(state, 0x00E0)

    assert jnp.sum(get_display(state)) == 0


def test_clear_screen_keeps_memory_below_screen(fresh_state):
    """00E0 only touches the framebuffer region."""
    state = execute(fresh_state, 0x00E0)
    assert jnp.array_equal(state.memory[:0xF00], fresh_state.memory[:0xF00])


def test_execute_call_and_return(fresh_state):
    """Test 2NNN (call) and 00EE (return) together."""
    state = fresh_state
    initial_pc = state.pc

    # Call subroutine
    state = execute(state, 0x2300)  # Call 0x300
    assert state.pc == 0x300
    assert state.stack.data[state.stack.pointer - 1] == initial_pc

    # Return from subroutine
    state = execute(state, 0x00EE)  # Return
    assert state.pc == initial_pc
    assert state.stack.pointer == 0


def test_nested_calls_return_in_order(fresh_state):
    state = execute(fresh_state, 0x2300)
    state = execute(state, 0x2400)
    assert state.stack.pointer == 2

    state = execute(state, 0x00EE)
    assert state.pc == 0x300
    state = execute(state, 0x00EE)
    assert state.pc == fresh_state.pc


def test_return_with_empty_stack_faults(fresh_state):
    """00EE on an empty stack latches an underflow fault."""
    state = execute(fresh_state, 0x00EE)

    assert state.fault == FAULT_STACK_UNDERFLOW
    assert state.stack.pointer == 0
    assert state.pc == fresh_state.pc


def test_machine_call_jumps(fresh_state):
    """0NNN is treated as a jump to NNN."""
    state = execute(fresh_state, 0x0345)

    assert state.pc == 0x345
    assert state.fault == FAULT_NONE
    assert state.stack.pointer == 0
