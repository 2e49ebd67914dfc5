"""CHIP-8 virtual machine: execution engine, frame buffer and input latch."""

from .cpu import Chip8
from .errors import (
    Chip8Error,
    DecodeError,
    MemoryBoundsError,
    StackOverflowError,
    StackUnderflowError,
)
from .framebuffer import FrameBuffer, PIXEL_OFF, PIXEL_ON
from .keypad import InputLatch, KEYMAP

__all__ = [
    "Chip8",
    "Chip8Error",
    "DecodeError",
    "FrameBuffer",
    "InputLatch",
    "KEYMAP",
    "MemoryBoundsError",
    "PIXEL_OFF",
    "PIXEL_ON",
    "StackOverflowError",
    "StackUnderflowError",
]
