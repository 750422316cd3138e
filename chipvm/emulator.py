"""Main CHIP-8 emulator execution engine."""

from functools import partial

import jax
import jax.lax
import jax.numpy as jnp
from chipvm.state import EmulatorState
from chipvm.decode import decode
from chipvm.constants import PROGRAM_START, FAULT_NONE
from chipvm.instructions.system import execute_system_instruction
from chipvm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset, execute_skip_if_key
)
from chipvm.instructions.alu import execute_alu_operation
from chipvm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chipvm.instructions.display import execute_display
from chipvm.instructions.misc import execute_misc_instruction


def _execute(state: EmulatorState, instruction: int) -> EmulatorState:
    decoded_instruction = decode(instruction)

    return jax.lax.switch(
        decoded_instruction.opcode,
        [
            execute_system_instruction,
            execute_jump,
            execute_call,
            execute_skip_if_equal_immediate,
            execute_skip_if_not_equal_immediate,
            execute_skip_if_equal_register,
            execute_set,
            execute_add,
            execute_alu_operation,
            execute_skip_if_not_equal_register,
            execute_set_index,
            execute_jump_with_offset,
            execute_random,
            execute_display,
            execute_skip_if_key,
            execute_misc_instruction,
        ],
        state, decoded_instruction
    )


@jax.jit
def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute a single CHIP-8 instruction word against `state`.

    The program counter is not advanced first; see `fetch` and `step`.
    Faults are latched in `state.fault`.
    """
    return _execute(state, instruction)


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> jnp.uint16:
    """Pack two bytes into uint16."""
    return (high.astype(jnp.uint16) << 8) | low.astype(jnp.uint16)


def fetch(state: EmulatorState) -> tuple[EmulatorState, jnp.uint16]:
    """Fetch next instruction from memory, big-endian, and advance pc."""
    instruction = _pack_u16(state.memory[state.pc], state.memory[state.pc + 1])
    return state.replace(pc=state.pc + 2), instruction


def is_runnable(state: EmulatorState) -> jnp.ndarray:
    """Whether `step` would execute an instruction.

    Execution is frozen while waiting for a key or after a fault, and the pc
    must lie inside the loaded program.
    """
    in_program = state.pc < PROGRAM_START + state.program_size
    return ~state.waiting & (state.fault == FAULT_NONE) & in_program


def _cycle(state: EmulatorState) -> EmulatorState:
    fetched_state, instruction = fetch(state)
    new_state = _execute(fetched_state, instruction)

    # A faulting instruction leaves no partial effects behind
    return jax.lax.cond(
        new_state.fault == FAULT_NONE,
        lambda states: states[0],
        lambda states: states[1].replace(fault=states[0].fault),
        (new_state, state)
    )


def _step(state: EmulatorState) -> EmulatorState:
    return jax.lax.cond(is_runnable(state), _cycle, lambda s: s, state)


@jax.jit
def step(state: EmulatorState) -> EmulatorState:
    """Run one fetch-decode-execute cycle, or nothing if not runnable."""
    return _step(state)


@partial(jax.jit, static_argnums=1)
def run(state: EmulatorState, num_steps: int) -> EmulatorState:
    """Run `num_steps` cycles in a single compiled scan."""
    state, _ = jax.lax.scan(lambda s, _: (_step(s), None), state, length=num_steps)
    return state


@jax.jit
def tick_timers(state: EmulatorState) -> EmulatorState:
    """Decrement the delay and sound timers if non-zero. Hosts call this at 60 Hz."""
    return state.replace(
        delay_timer=jnp.where(state.delay_timer > 0, state.delay_timer - 1, state.delay_timer),
        sound_timer=jnp.where(state.sound_timer > 0, state.sound_timer - 1, state.sound_timer),
    )
