from __future__ import annotations

import random

import pytest

from chip8vm import Chip8
from chip8vm import config


@pytest.fixture
def chip() -> Chip8:
    return Chip8(rng=random.Random(1234))


@pytest.fixture
def execute(chip):
    """Write one instruction word at the current PC and run it."""

    def _execute(word: int) -> int:
        chip.write_byte(chip.pc, word >> 8)
        chip.write_byte(chip.pc + 1, word & 0xFF)
        return chip.step()

    return _execute


@pytest.fixture(autouse=True)
def logs_off():
    config.set_logging(False)
    yield
    config.set_logging(False)
