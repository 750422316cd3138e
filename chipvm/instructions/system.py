"""CHIP-8 system instructions (0x0xxx)."""

import jax
import jax.lax
import jax.numpy as jnp
from chipvm.state import EmulatorState
from chipvm.decode import DecodedInstruction
from chipvm.constants import FAULT_STACK_UNDERFLOW, FAULT_INVALID_INSTRUCTION
from chipvm.framebuffer import clear_screen
from chipvm.stack import pop, is_empty


def raise_fault(state: EmulatorState, code: int) -> EmulatorState:
    """Latch a fault code; the caller discards the instruction's effects."""
    return state.replace(fault=jnp.astype(code, jnp.uint8))


def execute_invalid(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Undefined instruction."""
    return raise_fault(state, FAULT_INVALID_INSTRUCTION)


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return clear_screen(state)


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    def _return(state):
        stack, address = pop(state.stack)
        return state.replace(stack=stack, pc=address)

    return jax.lax.cond(
        is_empty(state.stack),
        lambda state: raise_fault(state, FAULT_STACK_UNDERFLOW),
        _return,
        state
    )


def execute_machine_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """0NNN - Legacy machine code routine call, treated as a jump to NNN."""
    return state.replace(pc=jnp.astype(instruction.nnn, jnp.uint16))


def execute_system_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch system instructions."""
    return jax.lax.cond(
        0x00E0 == instruction.raw,
        execute_clear_screen,
        lambda state, instruction: jax.lax.cond(
            0x00EE == instruction.raw,
            execute_return,
            execute_machine_call,
            state, instruction
        ),
        state, instruction
    )
