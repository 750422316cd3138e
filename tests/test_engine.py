"""Tests for the stateful engine used by hosts."""

import io

import numpy as np
import pytest
from chipvm import (
    Engine, VirtualMachine, StackOverflow, StackUnderflow, InvalidInstruction,
    MachineFault, RomTooLarge, constant_byte,
)
from chipvm.constants import MAX_ROM_SIZE, PROGRAM_START
from chipvm.logging import ConsoleLogger
from conftest import assemble


def test_engine_runs_program():
    engine = Engine(assemble(0x6005, 0xF015))
    engine.run(2)

    assert engine.delay_timer == 5
    engine.tick_timers()
    assert engine.delay_timer == 4


def test_engine_draws():
    # Draw font glyph "0" at (0, 0)
    engine = Engine(assemble(0xA000, 0xD005))
    engine.run(2)

    assert engine.display.shape == (64, 32)
    assert engine.display.dtype == np.bool_
    assert engine.get_pixel(0, 0)
    assert engine.get_pixel(3, 0)
    assert not engine.get_pixel(4, 0)


def test_engine_set_pixel():
    engine = Engine()
    engine.set_pixel(12, 7, True)
    assert engine.get_pixel(12, 7)
    engine.set_pixel(12, 7, False)
    assert not engine.display.any()


def test_engine_keys_and_wait():
    engine = Engine(assemble(0xF20A, 0xE29E, 0x6001, 0x6102))
    engine.step()
    assert engine.waiting
    assert not engine.runnable

    engine.key_down(0x7)
    assert not engine.waiting
    assert engine.state.V[2] == 0x7

    # Key 7 is held, so EX9E skips the V0 assignment
    engine.run(2)
    assert engine.state.V[0] == 0
    assert engine.state.V[1] == 2

    engine.key_up(0x7)
    assert not engine.state.keypad[0x7]


def test_engine_random_source():
    engine = Engine(assemble(0xC3F0), random_fn=constant_byte(0x5A))
    engine.step()
    assert engine.state.V[3] == 0x50


@pytest.mark.parametrize("rom,error,address,instruction", [
    (assemble(0x00EE), StackUnderflow, PROGRAM_START, 0x00EE),
    (assemble(0x6000, 0x5121), InvalidInstruction, PROGRAM_START + 2, 0x5121),
    (assemble(0x2200), StackOverflow, PROGRAM_START, 0x2200),
])
def test_engine_raises_faults(rom, error, address, instruction):
    engine = Engine(rom)

    with pytest.raises(error) as excinfo:
        engine.run(20)

    assert isinstance(excinfo.value, MachineFault)
    assert excinfo.value.address == address
    assert excinfo.value.instruction == instruction
    assert f"{instruction:04X}" in str(excinfo.value)


def test_fault_is_sticky():
    engine = Engine(assemble(0x00EE))
    with pytest.raises(StackUnderflow):
        engine.step()
    with pytest.raises(StackUnderflow):
        engine.step()


def test_engine_stop():
    engine = Engine(assemble(0x1200))
    assert not engine.stopped

    engine.stop()
    assert engine.stopped


def test_engine_rejects_large_rom():
    with pytest.raises(RomTooLarge):
        Engine(bytes(MAX_ROM_SIZE + 1))


def test_engines_are_independent():
    first = Engine(assemble(0x6001, 0x7001))
    second = Engine(assemble(0x6009))

    first.run(2)
    second.step()
    first.key_down(0x3)

    assert first.state.V[0] == 2
    assert second.state.V[0] == 9
    assert not second.state.keypad[0x3]


def test_engine_from_file(tmp_path):
    path = tmp_path / "rom.ch8"
    path.write_bytes(assemble(0x6A0A))

    engine = Engine.from_file(str(path))
    engine.step()

    assert engine.state.V[0xA] == 0x0A
    assert not engine.runnable


def test_engine_logs_rom_size():
    stream = io.StringIO()
    Engine(assemble(0x6000), logger=ConsoleLogger("Engine", log_level="DEBUG", stream=stream))
    assert "Loaded 2 byte ROM" in stream.getvalue()


def test_virtual_machine_alias():
    assert VirtualMachine is Engine
