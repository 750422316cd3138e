"""Tests for the command-line runner."""

import pytest
from PIL import Image
from chipvm.cli import main, run_headless, build_parser
from chipvm.config import HostConfig
from chipvm.errors import StackUnderflow
from conftest import assemble


@pytest.fixture
def rom_path(tmp_path):
    # Draw glyph "0" at (0, 0), then loop forever
    path = tmp_path / "draw.ch8"
    path.write_bytes(assemble(0xA000, 0xD005, 0x1204))
    return path


@pytest.fixture
def faulting_rom_path(tmp_path):
    path = tmp_path / "fault.ch8"
    path.write_bytes(assemble(0x00EE))
    return path


def test_run_headless(rom_path):
    engine = run_headless(str(rom_path), 3, HostConfig(seed=0), progress=False)

    assert engine.get_pixel(0, 0)
    assert engine.runnable


def test_run_headless_logs_session(rom_path, capsys):
    run_headless(str(rom_path), 2, HostConfig(seed=0), progress=False)
    out = capsys.readouterr().out

    assert f"Running {rom_path}" in out
    assert "Stopped after 2 frames, 20 instructions" in out


def test_run_headless_fault(faulting_rom_path, capsys):
    with pytest.raises(StackUnderflow):
        run_headless(str(faulting_rom_path), 3, HostConfig(seed=0), progress=False)

    assert "Machine halted" in capsys.readouterr().out


def test_main_headless_screenshot(rom_path, tmp_path):
    screenshot = tmp_path / "shot.png"
    code = main([
        "headless", str(rom_path), "--frames", "3", "--screenshot", str(screenshot),
        "--no-progress", "--scale", "2", "--seed", "1",
    ])

    assert code == 0
    with Image.open(screenshot) as image:
        assert image.size == (128, 64)


def test_main_fault_exit_code(faulting_rom_path):
    assert main(["headless", str(faulting_rom_path), "--frames", "1", "--no-progress"]) == 1


def test_main_missing_rom(tmp_path, capsys):
    assert main(["headless", str(tmp_path / "missing.ch8"), "--no-progress"]) == 1
    assert "error:" in capsys.readouterr().err


def test_main_bad_config(rom_path, capsys):
    assert main(["headless", str(rom_path), "--scale", "0"]) == 2
    assert "scale" in capsys.readouterr().err


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
