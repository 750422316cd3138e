"""CHIP-8 emulator state structures."""

from typing import Optional

import jax
import jax.numpy as jnp
import numpy as np
from flax.struct import dataclass, PyTreeNode, field

from chipvm.constants import (
    MEMORY_SIZE, PROGRAM_START, FONT_START, FONT_DATA, MAX_ROM_SIZE, STACK_SIZE,
    NUM_REGISTERS, NUM_KEYS, FAULT_NONE,
)
from chipvm.errors import RomTooLarge, AllocationFailure
from chipvm.rng import RandomFn, uniform_byte


@dataclass(frozen=True)
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state.

    The packed framebuffer lives in the reserved tail of `memory`
    (see `chipvm.framebuffer`). `program_size` bounds execution: stepping at
    or past `PROGRAM_START + program_size` does nothing.
    """
    rng: jax.Array
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.astype(PROGRAM_START, jnp.uint16))
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    waiting: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.bool_))
    wait_register: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    stopped: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.bool_))
    program_size: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    fault: jnp.ndarray = field(default_factory=lambda: jnp.astype(FAULT_NONE, jnp.uint8))
    random_fn: RandomFn = field(pytree_node=False, default=uniform_byte)


def rom_to_array(rom) -> np.ndarray:
    """Convert ROM bytes (or a sequence of ints) to a uint8 array."""
    return np.frombuffer(bytes(rom), dtype=np.uint8)


def create_state(
    rom=b"",
    rng: Optional[jax.Array] = None,
    random_fn: RandomFn = uniform_byte,
) -> EmulatorState:
    """Create initial emulator state with font data and ROM loaded.

    Args:
        rom: Program bytes, copied to memory starting at 0x200
        rng: PRNG key consumed by `random_fn` (default: key 0)
        random_fn: Source of random bytes for CXNN

    Raises:
        RomTooLarge: if the ROM exceeds the program region
        AllocationFailure: if the machine storage cannot be allocated
    """
    rom_data = rom_to_array(rom)
    if len(rom_data) > MAX_ROM_SIZE:
        raise RomTooLarge(len(rom_data))

    if rng is None:
        rng = jax.random.PRNGKey(0)

    try:
        state = EmulatorState(rng, random_fn=random_fn)
        memory = state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA)
        memory = memory.at[PROGRAM_START:PROGRAM_START + len(rom_data)].set(jnp.asarray(rom_data))
        state = state.replace(
            memory=memory,
            program_size=jnp.astype(len(rom_data), jnp.uint16),
        )
        # Dispatch is asynchronous; surface allocation errors here
        jax.block_until_ready(state)
    except MemoryError as e:
        raise AllocationFailure(f"could not allocate machine storage: {e}") from e
    except jax.errors.JaxRuntimeError as e:
        if "RESOURCE_EXHAUSTED" not in str(e):
            raise
        raise AllocationFailure(f"could not allocate machine storage: {e}") from e

    return state


def load_rom(filename: str, rng: Optional[jax.Array] = None, random_fn: RandomFn = uniform_byte) -> EmulatorState:
    """Read a ROM file and create an emulator state running it."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return create_state(rom_data, rng, random_fn)
