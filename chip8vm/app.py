# CHIP-8 host window.
# We're subclassing pyglet (it handles the window, drawing and keyboard) and overriding
# the handlers we need. The window owns one Chip8 engine, runs one engine cycle per frame
# and forwards key events into the engine's input latch.

import argparse
import sys

import numpy as np
import pyglet
from pyglet.window import key

from . import config
from .config import log
from .cpu import Chip8
from .errors import Chip8Error


class Chip8Window(pyglet.window.Window):
    def __init__(self, chip=None, scale=config.scale):
        self.pixel_scale = scale
        super().__init__(
            config.width * scale,
            config.height * scale,
            caption="CHIP-8 Emulator",
            resizable=False,
        )
        self.chip = chip if chip is not None else Chip8()

        # Pre-allocated small framebuffer (64x32 RGBA), upscaled with numpy.repeat
        self._small_framebuf = np.zeros((config.height, config.width, 4), dtype=np.uint8)
        self._small_framebuf[..., 3] = 255
        self.image = pyglet.image.ImageData(
            self.width,
            self.height,
            'RGBA',
            self._scaled().tobytes(),
        )

        # ---- Performance Counters ----
        self.cps_label = pyglet.text.Label(
            "Cycles/s: 0",
            font_size=12,
            x=5,
            y=self.height - 15,
            anchor_x='left',
            anchor_y='center',
            color=(255, 255, 255, 255)
        )
        self._last_cycle_count = 0
        pyglet.clock.schedule_interval(self._update_cps, 1.0)

        # one engine cycle per frame
        pyglet.clock.schedule_interval(self._cpu_tick, 1.0 / config.frame_HZ)

    def _update_cps(self, dt):
        count = self.chip.cycle_count
        self.cps_label.text = f"Cycles/s: {int((count - self._last_cycle_count) / dt)}"
        self._last_cycle_count = count

    def _scaled(self):
        # pyglet's origin is bottom-left, CHIP-8's is top-left
        frame = self._small_framebuf[::-1]
        if self.pixel_scale != 1:
            frame = np.repeat(np.repeat(frame, self.pixel_scale, axis=0), self.pixel_scale, axis=1)
        return np.ascontiguousarray(frame)

    # ---- CPU cycle ----
    def _cpu_tick(self, dt):
        if self.has_exit:
            return
        try:
            self.chip.cycle()
        except Chip8Error as e:
            print("Emulation error:", e)
            self.halt()

    def halt(self):
        self.has_exit = True
        pyglet.clock.unschedule(self._cpu_tick)
        pyglet.clock.unschedule(self._update_cps)
        self.close()

    # ---- Drawing ----
    def on_draw(self):
        self.clear()
        fb = self.chip.framebuffer
        if fb.should_draw:
            self._small_framebuf[..., :3] = fb.grid()[..., None]
            self.image.set_data('RGBA', self.width * 4, self._scaled().tobytes())
            fb.should_draw = False
        self.image.blit(0, 0)
        self.cps_label.draw()

    # ---- Input ----
    def on_key_press(self, symbol, modifiers):
        #@Override
        if symbol == key.ESCAPE:
            self.halt()
            return
        if symbol == key.F1:
            config.set_logging(not config.logsOn)
            print("logsOn:", config.logsOn)
            return
        self.chip.keypad.press(key.symbol_string(symbol))

    def on_key_release(self, symbol, modifiers):
        #@Override
        self.chip.keypad.release(key.symbol_string(symbol))


# ---- Entry point ----
def main(argv=None):
    parser = argparse.ArgumentParser(prog="chip8vm", description="CHIP-8 virtual machine")
    parser.add_argument("rom", nargs="?", help="path to a CHIP-8 program image")
    parser.add_argument("--scale", type=int, default=config.scale, help="window pixels per CHIP-8 pixel")
    parser.add_argument("--log", action="store_true", help="print every executed instruction")
    args = parser.parse_args(argv)

    if args.rom is None:
        print("Usage: chip8vm <rom-file> [--scale N] [--log]")
        sys.exit(1)

    config.set_logging(args.log)
    chip = Chip8()
    try:
        chip.load_rom(args.rom)
    except (OSError, Chip8Error) as e:
        print("Could not load ROM:", e)
        sys.exit(1)

    Chip8Window(chip, scale=args.scale)
    log("Running", args.rom)
    pyglet.app.run()


if __name__ == "__main__":
    main()
