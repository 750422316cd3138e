"""Stateful engine wrapper for hosts driving the emulator."""

from typing import Optional

import jax
import jax.numpy as jnp
import numpy as np

from chipvm.state import create_state
from chipvm.emulator import step, run, tick_timers, is_runnable
from chipvm.keypad import press_key, release_key
from chipvm.framebuffer import get_pixel, set_pixel, get_display
from chipvm.errors import raise_for_fault
from chipvm.rng import RandomFn, uniform_byte
from chipvm.logging import ConsoleLogger


class Engine:
    """One CHIP-8 machine owned by a host loop.

    Wraps the pure functions of `chipvm.emulator` around a private
    `EmulatorState`. Engines share nothing, so any number can run side by side.

    Example:
        ```python
        engine = Engine(rom_bytes)
        engine.key_down(0x5)
        engine.run(10)
        engine.tick_timers()
        frame = engine.display
        ```
    """

    def __init__(
        self,
        rom=b"",
        rng: Optional[jax.Array] = None,
        random_fn: RandomFn = uniform_byte,
        logger: Optional[ConsoleLogger] = None,
    ):
        """Build the machine from ROM bytes.

        Args:
            rom: Program bytes, loaded at 0x200
            rng: PRNG key for the random source (default: key 0)
            random_fn: Source of random bytes for CXNN
            logger: Logger for engine events (default: a silent-below-INFO logger)

        Raises:
            RomTooLarge: if the ROM does not fit in memory
            AllocationFailure: if machine storage cannot be allocated
        """
        self.logger = logger or ConsoleLogger("Engine")
        self.state = create_state(rom, rng, random_fn)
        self.logger.debug(f"Loaded {int(self.state.program_size)} byte ROM")

    @classmethod
    def from_file(cls, filename: str, **kwargs) -> "Engine":
        """Create an engine running the ROM stored in `filename`."""
        with open(filename, 'rb') as f:
            return cls(f.read(), **kwargs)

    def step(self) -> None:
        """Execute one instruction.

        Raises:
            MachineFault: if the program hit an unrecoverable fault
        """
        self.state = step(self.state)
        raise_for_fault(self.state)

    def run(self, num_steps: int) -> None:
        """Execute `num_steps` instructions (fewer if execution freezes)."""
        self.state = run(self.state, num_steps)
        raise_for_fault(self.state)

    def key_down(self, key: int) -> None:
        self.state = press_key(self.state, key)

    def key_up(self, key: int) -> None:
        self.state = release_key(self.state, key)

    def tick_timers(self) -> None:
        self.state = tick_timers(self.state)

    def get_pixel(self, x: int, y: int) -> bool:
        return bool(get_pixel(self.state, x, y))

    def set_pixel(self, x: int, y: int, on: bool) -> None:
        self.state = set_pixel(self.state, x, y, on)

    def stop(self) -> None:
        """Mark the machine as stopped. The engine never stops itself."""
        self.state = self.state.replace(stopped=jnp.asarray(True, dtype=jnp.bool_))

    @property
    def display(self) -> np.ndarray:
        """Boolean display of shape (64, 32), indexed [x, y]."""
        return np.asarray(get_display(self.state))

    @property
    def delay_timer(self) -> int:
        return int(self.state.delay_timer)

    @property
    def sound_timer(self) -> int:
        return int(self.state.sound_timer)

    @property
    def waiting(self) -> bool:
        return bool(self.state.waiting)

    @property
    def stopped(self) -> bool:
        return bool(self.state.stopped)

    @property
    def runnable(self) -> bool:
        """Whether the next `step` would execute an instruction."""
        return bool(is_runnable(self.state))


VirtualMachine = Engine
