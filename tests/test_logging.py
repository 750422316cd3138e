"""Tests for console logging."""

import io

import pytest
from chipvm.logging import ConsoleLogger, EmulatorLogger, frame_progress


def test_level_filtering():
    stream = io.StringIO()
    logger = ConsoleLogger("test", log_level="WARNING", stream=stream)

    logger.info("hidden")
    logger.warning("shown")

    output = stream.getvalue()
    assert "hidden" not in output
    assert "shown" in output
    assert "[test]" in output


def test_no_colors_on_plain_stream():
    stream = io.StringIO()
    ConsoleLogger(stream=stream).error("boom")
    assert "\033[" not in stream.getvalue()


def test_unknown_level():
    with pytest.raises(ValueError):
        ConsoleLogger(log_level="LOUD")


def test_emulator_logger_counts_frames():
    stream = io.StringIO()
    logger = EmulatorLogger(stream=stream, show_timestamps=False)
    logger.log_frame(10)
    logger.log_frame(10)
    logger.log_session_end()

    assert logger.frames == 2
    assert logger.instructions == 20
    assert "Stopped after 2 frames, 20 instructions" in stream.getvalue()


def test_frame_progress_length():
    assert len(list(frame_progress(5, disable=True))) == 5
