"""CHIP-8 virtual machine package."""

from chipvm.state import EmulatorState, StackState, create_state, load_rom
from chipvm.emulator import execute, fetch, step, run, tick_timers, is_runnable
from chipvm.decode import DecodedInstruction, decode, disassemble
from chipvm.keypad import press_key, release_key, KEY_LAYOUT
from chipvm.framebuffer import get_pixel, set_pixel, clear_screen, get_display
from chipvm.engine import Engine, VirtualMachine
from chipvm.errors import (
    ChipVMError, RomTooLarge, AllocationFailure, MachineFault, StackOverflow,
    StackUnderflow, InvalidInstruction,
)
from chipvm.rng import uniform_byte, constant_byte, make_key
from chipvm.constants import PROGRAM_START, FONT_START, MAX_ROM_SIZE, SCREEN_WIDTH, SCREEN_HEIGHT
from chipvm.rendering import display_to_rgb, create_color_scheme, render

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "load_rom",
    "fetch",
    "execute",
    "step",
    "run",
    "tick_timers",
    "is_runnable",
    "DecodedInstruction",
    "decode",
    "disassemble",
    "press_key",
    "release_key",
    "KEY_LAYOUT",
    "get_pixel",
    "set_pixel",
    "clear_screen",
    "get_display",
    "Engine",
    "VirtualMachine",
    "ChipVMError",
    "RomTooLarge",
    "AllocationFailure",
    "MachineFault",
    "StackOverflow",
    "StackUnderflow",
    "InvalidInstruction",
    "uniform_byte",
    "constant_byte",
    "make_key",
    "PROGRAM_START",
    "FONT_START",
    "MAX_ROM_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "display_to_rgb",
    "create_color_scheme",
    "render",
]
