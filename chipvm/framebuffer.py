"""Packed monochrome framebuffer stored in the reserved tail of memory.

Pixel (x, y) is bit `y * SCREEN_WIDTH + x` of the bitmap at SCREEN_START,
most significant bit first within each byte. Coordinates are not validated.
"""

import jax.numpy as jnp
from chipvm.state import EmulatorState
from chipvm.constants import SCREEN_START, SCREEN_BYTES, SCREEN_WIDTH, SCREEN_HEIGHT


def _locate(x, y):
    index = y * SCREEN_WIDTH + x
    return SCREEN_START + index // 8, jnp.asarray(0x80 >> (index % 8), dtype=jnp.uint8)


def get_pixel(state: EmulatorState, x, y) -> jnp.ndarray:
    """Return whether pixel (x, y) is on."""
    address, mask = _locate(x, y)
    return (state.memory[address] & mask) != 0


def set_pixel(state: EmulatorState, x, y, on) -> EmulatorState:
    """Turn pixel (x, y) on or off."""
    address, mask = _locate(x, y)
    byte = state.memory[address]
    new_byte = jnp.where(on, byte | mask, byte & (0xFF ^ mask))
    return state.replace(memory=state.memory.at[address].set(new_byte))


def clear_screen(state: EmulatorState) -> EmulatorState:
    return state.replace(memory=state.memory.at[SCREEN_START:SCREEN_START + SCREEN_BYTES].set(0))


def unpack_screen(memory: jnp.ndarray) -> jnp.ndarray:
    """Unpack the bitmap into a boolean (SCREEN_HEIGHT, SCREEN_WIDTH) grid."""
    bits = jnp.unpackbits(memory[SCREEN_START:SCREEN_START + SCREEN_BYTES])
    return bits.reshape(SCREEN_HEIGHT, SCREEN_WIDTH).astype(jnp.bool_)


def pack_screen(memory: jnp.ndarray, screen: jnp.ndarray) -> jnp.ndarray:
    """Write a boolean (SCREEN_HEIGHT, SCREEN_WIDTH) grid back as the bitmap."""
    packed = jnp.packbits(screen.reshape(-1))
    return memory.at[SCREEN_START:SCREEN_START + SCREEN_BYTES].set(packed)


def get_display(state: EmulatorState) -> jnp.ndarray:
    """Boolean display of shape (SCREEN_WIDTH, SCREEN_HEIGHT), indexed [x, y]."""
    return unpack_screen(state.memory).T
