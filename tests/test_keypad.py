from __future__ import annotations

import pytest

from chip8vm import InputLatch, KEYMAP


def test_keymap_covers_every_key_once() -> None:
    assert len(KEYMAP) == 16
    assert sorted(KEYMAP.values()) == list(range(16))


@pytest.mark.parametrize("host_key, code", sorted(KEYMAP.items()))
def test_press_latches_mapped_code(host_key: str, code: int) -> None:
    latch = InputLatch()
    assert latch.press(host_key) == code
    assert latch.pressed == code
    assert latch.is_pressed(code)


def test_unmapped_key_is_dropped() -> None:
    latch = InputLatch()
    latch.press("Q")
    assert latch.press("SPACE") is None
    assert latch.pressed == 0x4


def test_second_press_replaces_first() -> None:
    latch = InputLatch()
    latch.press("Q")
    latch.press("V")
    assert not latch.is_pressed(0x4)
    assert latch.is_pressed(0xF)


def test_release_only_clears_the_latched_key() -> None:
    latch = InputLatch()
    latch.press("X")
    latch.release("Z")
    assert latch.pressed == 0x0
    latch.release("X")
    assert latch.pressed is None


def test_key_zero_is_distinct_from_nothing_pressed() -> None:
    latch = InputLatch()
    assert not latch.is_pressed(0x0)
    latch.press("X")
    assert latch.is_pressed(0x0)
    latch.clear()
    assert not latch.is_pressed(0x0)


def test_custom_keymap() -> None:
    latch = InputLatch({"UP": 0x2})
    assert latch.press("Q") is None
    assert latch.press("UP") == 0x2
