"""Random byte sources for the CXNN instruction."""

import os
from typing import Callable, Optional

import jax
import jax.numpy as jnp

RandomFn = Callable[[jax.Array], tuple[jax.Array, jnp.ndarray]]


def uniform_byte(rng: jax.Array) -> tuple[jax.Array, jnp.ndarray]:
    """Draw a uniform byte, returning the advanced key and the byte."""
    rng, subkey = jax.random.split(rng)
    value = jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32)
    return rng, jnp.astype(value, jnp.uint8)


def constant_byte(value: int) -> RandomFn:
    """Random source that always yields `value`, for reproducible runs."""
    byte = value & 0xFF

    def _constant(rng):
        return rng, jnp.asarray(byte, dtype=jnp.uint8)

    return _constant


def make_key(seed: Optional[int] = None) -> jax.Array:
    """PRNG key from `seed`, or from OS entropy when no seed is given."""
    if seed is None:
        seed = int.from_bytes(os.urandom(4), "little") >> 1
    return jax.random.PRNGKey(seed)
