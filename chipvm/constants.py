"""CHIP-8 machine constants."""

import jax.numpy as jnp

MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200
FONT_START = 0x000

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32

# Reserved tail of memory: call stack area followed by the packed framebuffer
RESERVED_SIZE = 352
MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START - RESERVED_SIZE
SCREEN_START = 0xF00
SCREEN_BYTES = SCREEN_WIDTH * SCREEN_HEIGHT // 8

STACK_SIZE = 16
NUM_REGISTERS = 16
NUM_KEYS = 16
FLAG_REGISTER = 0xF

SPRITE_WIDTH = 8
FONT_GLYPH_SIZE = 5

FAULT_NONE = 0
FAULT_STACK_OVERFLOW = 1
FAULT_STACK_UNDERFLOW = 2
FAULT_INVALID_INSTRUCTION = 3

FONT_DATA = jnp.array([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0xA0, 0xA0, 0xF0, 0x20, 0x20,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
], dtype=jnp.uint8)
