"""CHIP-8 display operations."""

import jax.numpy as jnp
from chipvm.state import EmulatorState
from chipvm.decode import DecodedInstruction
from chipvm.constants import SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH, FLAG_REGISTER
from chipvm.framebuffer import unpack_screen, pack_screen

# Pre-computed coordinate grids in bitmap layout, indexed [y, x]
_yy, _xx = jnp.meshgrid(jnp.arange(SCREEN_HEIGHT), jnp.arange(SCREEN_WIDTH), indexing='ij')


def sprite_mask(state: EmulatorState, instruction: DecodedInstruction) -> jnp.ndarray:
    """Screen-sized mask of the "on" pixels of sprite DXYN.

    The start position wraps around the screen; the sprite itself is clipped
    at the right and bottom edges.
    """
    sprite_x = jnp.astype(state.V[instruction.x], jnp.int32) % SCREEN_WIDTH
    sprite_y = jnp.astype(state.V[instruction.y], jnp.int32) % SCREEN_HEIGHT

    col_offset = _xx - sprite_x
    row_offset = _yy - sprite_y
    in_sprite = (
        (col_offset >= 0) & (col_offset < SPRITE_WIDTH)
        & (row_offset >= 0) & (row_offset < instruction.n)
    )

    rows = jnp.astype(state.I, jnp.int32) + jnp.clip(row_offset, 0, 15)
    sprite_bytes = jnp.astype(state.memory[rows], jnp.int32)
    bits = (sprite_bytes >> (7 - jnp.clip(col_offset, 0, SPRITE_WIDTH - 1))) & 1
    return (bits == 1) & in_sprite


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - XOR an 8xN sprite from memory[I] onto the screen at (VX, VY).

    VF is set to 1 if any lit sprite pixel lands on a lit screen pixel.
    """
    screen = unpack_screen(state.memory)
    sprite = sprite_mask(state, instruction)
    collision = jnp.any(screen & sprite)

    return state.replace(
        memory=pack_screen(state.memory, screen ^ sprite),
        V=state.V.at[FLAG_REGISTER].set(jnp.astype(collision, jnp.uint8))
    )
