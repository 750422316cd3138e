"""CHIP-8 call stack operations.

Bounds are checked by the opcode handlers, which latch a fault instead of
calling these on a full or empty stack.
"""

import jax.numpy as jnp
from chipvm.state import StackState


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push return address onto stack."""
    new_data = stack.data.at[stack.pointer].set(jnp.astype(address, jnp.uint16))
    return stack.replace(data=new_data, pointer=jnp.astype(stack.pointer + 1, jnp.uint8))


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop return address from stack."""
    new_pointer = jnp.astype(stack.pointer - 1, jnp.uint8)
    popped_address = stack.data[new_pointer]
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address


def is_full(stack: StackState) -> jnp.ndarray:
    return stack.pointer >= stack.data.shape[0]


def is_empty(stack: StackState) -> jnp.ndarray:
    return stack.pointer == 0
