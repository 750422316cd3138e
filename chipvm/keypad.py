"""CHIP-8 keypad events delivered by the host."""

import jax
import jax.numpy as jnp
from chipvm.state import EmulatorState

# Host key names to logical keys, laid out as the classic 4x4 keypad:
#   1 2 3 C        1 2 3 4
#   4 5 6 D   <-   q w e r
#   7 8 9 E        a s d f
#   A 0 B F        z x c v
KEY_LAYOUT = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "q": 0x4, "w": 0x5, "e": 0x6, "r": 0xD,
    "a": 0x7, "s": 0x8, "d": 0x9, "f": 0xE,
    "z": 0xA, "x": 0x0, "c": 0xB, "v": 0xF,
}


@jax.jit
def press_key(state: EmulatorState, key: int) -> EmulatorState:
    """Key-down event. Resolves a pending FX0A wait with this key's index."""
    key = jnp.astype(key, jnp.uint8) & 0xF
    V = jnp.where(
        state.waiting,
        state.V.at[state.wait_register].set(key),
        state.V
    )
    return state.replace(
        keypad=state.keypad.at[key].set(True),
        V=V,
        waiting=jnp.zeros((), dtype=jnp.bool_),
    )


@jax.jit
def release_key(state: EmulatorState, key: int) -> EmulatorState:
    """Key-up event."""
    key = jnp.astype(key, jnp.uint8) & 0xF
    return state.replace(keypad=state.keypad.at[key].set(False))
