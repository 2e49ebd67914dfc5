from __future__ import annotations

import pytest

from chip8vm import Chip8, MemoryBoundsError, PIXEL_ON


def test_draw_font_glyph(chip: Chip8, execute) -> None:
    chip.I = 0  # glyph "0": F0 90 90 90 F0
    execute(0xD015)
    grid = chip.framebuffer.grid()
    assert [int(v) for v in grid[0, :8]] == [PIXEL_ON] * 4 + [0] * 4
    assert [int(v) for v in grid[1, :8]] == [PIXEL_ON, 0, 0, PIXEL_ON, 0, 0, 0, 0]
    assert chip.V[0xF] == 0
    assert chip.pc == 0x202


def test_drawing_twice_restores_buffer_and_flags_collision(chip: Chip8, execute) -> None:
    chip.V[1] = 10
    chip.V[2] = 7
    chip.I = 5 * 8  # glyph "8"
    execute(0xD125)
    first = chip.framebuffer.pixels.copy()
    assert first.any()
    assert chip.V[0xF] == 0
    execute(0xD125)
    assert not chip.framebuffer.pixels.any()
    assert chip.V[0xF] == 1


def test_collision_flag_stays_set_for_rest_of_draw(chip: Chip8, execute) -> None:
    chip.memory[0x300:0x302] = bytes([0x80, 0x40])
    chip.framebuffer.toggle(0)
    chip.I = 0x300
    execute(0xD002)
    # first row collided, second row drew onto a blank pixel
    assert chip.V[0xF] == 1
    assert not chip.framebuffer.is_on(0)
    assert chip.framebuffer.is_on(65)


def test_draw_clears_stale_flag(chip: Chip8, execute) -> None:
    chip.V[0xF] = 1
    chip.I = 0
    execute(0xD015)
    assert chip.V[0xF] == 0


def test_sprite_wraps_instead_of_clipping(chip: Chip8, execute) -> None:
    chip.V[0] = 62
    chip.V[1] = 31
    chip.memory[0x300:0x302] = bytes([0xF0, 0x80])
    chip.I = 0x300
    execute(0xD012)
    fb = chip.framebuffer
    # row 31: x=62,63 then onto the first cells of the grid
    for index in (62 + 64 * 31, 63 + 64 * 31, 0, 1):
        assert fb.is_on(index)
    # row 32 wraps back to row 0
    assert fb.is_on(62)
    assert int((fb.pixels != 0).sum()) == 5


def test_zero_row_sprite_draws_nothing(chip: Chip8, execute) -> None:
    chip.V[0xF] = 1
    execute(0xD010)
    assert not chip.framebuffer.pixels.any()
    assert chip.V[0xF] == 0


def test_clear_screen(chip: Chip8, execute) -> None:
    chip.I = 0
    execute(0xD015)
    execute(0x00E0)
    assert all(chip.framebuffer.get_pixel(i) == 0 for i in range(2048))
    assert chip.pc == 0x204


def test_sprite_read_past_memory_is_fatal(chip: Chip8, execute) -> None:
    chip.I = 0xFFE
    with pytest.raises(MemoryBoundsError) as exc:
        execute(0xD005)
    assert exc.value.address == 0x1000
