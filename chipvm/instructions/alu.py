"""CHIP-8 ALU operations (8xxx).

Each operation maps the register file to a new register file. Carry and
borrow operations write VF after the result, so the flag wins when X is F.
Shifts write VF first and read their operand from VY afterwards.
"""

import jax
import jax.lax
import jax.numpy as jnp
from chipvm.state import EmulatorState
from chipvm.decode import DecodedInstruction
from chipvm.constants import FLAG_REGISTER
from chipvm.instructions.system import execute_invalid


def _flag(condition) -> jnp.ndarray:
    return jnp.astype(condition, jnp.uint8)


def alu_set(V: jnp.ndarray, x, y) -> jnp.ndarray:
    """8XY0 - Set: VX = VY."""
    return V.at[x].set(V[y])


def alu_or(V: jnp.ndarray, x, y) -> jnp.ndarray:
    """8XY1 - Binary OR: VX |= VY."""
    return V.at[x].set(V[x] | V[y])


def alu_and(V: jnp.ndarray, x, y) -> jnp.ndarray:
    """8XY2 - Binary AND: VX &= VY."""
    return V.at[x].set(V[x] & V[y])


def alu_xor(V: jnp.ndarray, x, y) -> jnp.ndarray:
    """8XY3 - Logical XOR: VX ^= VY."""
    return V.at[x].set(V[x] ^ V[y])


def alu_add(V: jnp.ndarray, x, y) -> jnp.ndarray:
    """8XY4 - Add: VX += VY, VF = carry."""
    result = jnp.astype(V[x], jnp.uint16) + jnp.astype(V[y], jnp.uint16)
    V = V.at[x].set(jnp.astype(result & 0xFF, jnp.uint8))
    return V.at[FLAG_REGISTER].set(_flag(result > 0xFF))


def alu_sub_xy(V: jnp.ndarray, x, y) -> jnp.ndarray:
    """8XY5 - Subtract: VX -= VY, VF = not borrow."""
    vx, vy = V[x], V[y]
    V = V.at[x].set(vx - vy)
    return V.at[FLAG_REGISTER].set(_flag(vx >= vy))


def alu_shift_right(V: jnp.ndarray, x, y) -> jnp.ndarray:
    """8XY6 - Shift right: VF = VX & 1, VX = VY >> 1."""
    V = V.at[FLAG_REGISTER].set(V[x] & 1)
    return V.at[x].set(V[y] >> 1)


def alu_sub_yx(V: jnp.ndarray, x, y) -> jnp.ndarray:
    """8XY7 - Subtract: VX = VY - VX, VF = not borrow."""
    vx, vy = V[x], V[y]
    V = V.at[x].set(vy - vx)
    return V.at[FLAG_REGISTER].set(_flag(vy >= vx))


def alu_shift_left(V: jnp.ndarray, x, y) -> jnp.ndarray:
    """8XYE - Shift left: VF = VX >> 7, VX = VY << 1."""
    V = V.at[FLAG_REGISTER].set(V[x] >> 7)
    return V.at[x].set(V[y] << 1)


def _register_operation(alu_fn):
    def execute(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        return state.replace(V=alu_fn(state.V, instruction.x, instruction.y))
    return execute


ALU_HANDLERS = [
    _register_operation(alu_fn) for alu_fn in
    [alu_set, alu_or, alu_and, alu_xor, alu_add, alu_sub_xy, alu_shift_right, alu_sub_yx, alu_shift_left]
] + [execute_invalid]

# N -> handler index; 8XY8..8XYD and 8XYF are undefined
ALU_DISPATCH = jnp.array([0, 1, 2, 3, 4, 5, 6, 7, 9, 9, 9, 9, 9, 9, 8, 9], dtype=jnp.int32)


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    return jax.lax.switch(ALU_DISPATCH[instruction.n], ALU_HANDLERS, state, instruction)
