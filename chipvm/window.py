"""Interactive pygame host: window, keyboard, timers and beep."""

import numpy as np
import pygame

from chipvm.config import HostConfig
from chipvm.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from chipvm.engine import Engine
from chipvm.errors import MachineFault
from chipvm.keypad import KEY_LAYOUT
from chipvm.logging import EmulatorLogger
from chipvm.rendering import create_color_scheme, display_to_rgb
from chipvm.rng import make_key

KEY_MAP = {getattr(pygame, f"K_{name}"): key for name, key in KEY_LAYOUT.items()}


class Beeper:
    """Square-wave tone looped while the sound timer is non-zero."""

    def __init__(self, tone_hz: float, volume: float, logger: EmulatorLogger, sample_rate: int = 44100):
        self.sound = None
        self.playing = False
        try:
            pygame.mixer.init(frequency=sample_rate, size=-16, channels=1, buffer=512)
        except pygame.error as e:
            logger.warning(f"Audio disabled: {e}")
            return

        # The mixer may not honour the requested settings
        sample_rate, _, channels = pygame.mixer.get_init()
        t = np.arange(sample_rate // 10)
        wave = np.where((t * tone_hz * 2 / sample_rate) % 2 >= 1, 1, -1)
        wave = (wave * 32767).astype(np.int16)
        if channels > 1:
            wave = np.repeat(wave[:, None], channels, axis=1)
        self.sound = pygame.sndarray.make_sound(np.ascontiguousarray(wave))
        self.sound.set_volume(volume)

    def update(self, sound_timer: int):
        if self.sound is None:
            return
        if sound_timer > 0 and not self.playing:
            self.sound.play(loops=-1)
            self.playing = True
        elif sound_timer == 0 and self.playing:
            self.sound.stop()
            self.playing = False


def handle_events(engine: Engine):
    """Deliver pygame events to the engine. ESC or closing the window stops it."""
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            engine.stop()
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                engine.stop()
            elif event.key in KEY_MAP:
                engine.key_down(KEY_MAP[event.key])
        elif event.type == pygame.KEYUP:
            if event.key in KEY_MAP:
                engine.key_up(KEY_MAP[event.key])


def draw(screen: pygame.Surface, engine: Engine, config: HostConfig):
    on_color, off_color = create_color_scheme(config.color_scheme)
    frame = display_to_rgb(engine.display, config.scale, on_color, off_color)
    # surfarray expects (width, height, 3)
    pygame.surfarray.blit_array(screen, frame.transpose(1, 0, 2))
    pygame.display.flip()


def run_window(rom_path: str, config: HostConfig = HostConfig()) -> None:
    """Run a ROM in a pygame window until it is closed or the machine faults."""
    logger = EmulatorLogger(log_level=config.log_level)
    engine = Engine.from_file(rom_path, rng=make_key(config.seed), logger=logger)
    logger.log_session_start(rom_path, config.asdict())

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH * config.scale, SCREEN_HEIGHT * config.scale))
    pygame.display.set_caption("chipvm")
    clock = pygame.time.Clock()
    beeper = Beeper(config.tone_hz, config.volume, logger)

    try:
        while not engine.stopped:
            clock.tick(config.fps)
            handle_events(engine)
            if engine.stopped:
                break

            engine.tick_timers()
            try:
                engine.run(config.instructions_per_frame)
            except MachineFault as e:
                logger.log_fault(e)
                engine.stop()
            logger.log_frame(config.instructions_per_frame)

            beeper.update(engine.sound_timer)
            draw(screen, engine, config)
    finally:
        logger.log_session_end()
        pygame.quit()
