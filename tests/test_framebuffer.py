from __future__ import annotations

import pytest

from chip8vm import FrameBuffer, PIXEL_OFF, PIXEL_ON


def test_starts_blank() -> None:
    fb = FrameBuffer()
    assert fb.pixels.shape == (2048,)
    assert not fb.pixels.any()


@pytest.mark.parametrize(
    "x, y, index",
    [
        (0, 0, 0),
        (63, 0, 63),
        (64, 0, 64),  # runs onto the next row
        (0, 1, 64),
        (63, 31, 2047),
        (64, 31, 0),  # past the last cell wraps to the first
        (0, 32, 0),
        (10, 40, 10 + 64 * 8),
    ],
)
def test_index_wraps_modulo_grid(x: int, y: int, index: int) -> None:
    assert FrameBuffer().index(x, y) == index


def test_toggle_reports_collision() -> None:
    fb = FrameBuffer()
    assert fb.toggle(5) is False
    assert fb.get_pixel(5) == PIXEL_ON
    assert fb.is_on(5)
    assert fb.toggle(5) is True
    assert fb.get_pixel(5) == PIXEL_OFF
    assert not fb.is_on(5)


def test_clear_turns_every_pixel_off() -> None:
    fb = FrameBuffer()
    for i in range(0, 2048, 3):
        fb.toggle(i)
    fb.clear()
    assert all(fb.get_pixel(i) == PIXEL_OFF for i in range(2048))


def test_grid_is_row_major_view() -> None:
    fb = FrameBuffer()
    fb.toggle(fb.index(3, 2))
    grid = fb.grid()
    assert grid.shape == (32, 64)
    assert grid[2, 3] == PIXEL_ON
    assert int(grid.sum()) == PIXEL_ON


def test_should_draw_flag() -> None:
    fb = FrameBuffer()
    fb.should_draw = False
    fb.toggle(0)
    assert fb.should_draw
    fb.should_draw = False
    fb.clear()
    assert fb.should_draw
