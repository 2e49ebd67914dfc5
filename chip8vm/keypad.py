"""Single-key input latch.

The host reports key events by name (the names pyglet gives its key symbols,
see ``pyglet.window.key.symbol_string``) and the latch keeps at most one
CHIP-8 key code (0x0 - 0xF) as the currently pressed key.

Keypad layout on a QWERTY keyboard::

    1 2 3 C        1 2 3 4
    4 5 6 D   <-   Q W E R
    7 8 9 E        A S D F
    A 0 B F        Z X C V
"""

#map binding keys
KEYMAP = {
    "_1": 0x1, "_2": 0x2, "_3": 0x3, "_4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}


class InputLatch:
    def __init__(self, keymap=None):
        self.keymap = dict(KEYMAP if keymap is None else keymap)
        self.pressed = None

    def press(self, host_key):
        """Latch the code for ``host_key``; unmapped keys are dropped."""
        code = self.keymap.get(host_key)
        if code is None:
            return None
        # a second press replaces the first
        self.pressed = code
        return code

    def release(self, host_key):
        code = self.keymap.get(host_key)
        if code is not None and code == self.pressed:
            self.pressed = None

    def is_pressed(self, code):
        return self.pressed is not None and self.pressed == code

    def clear(self):
        self.pressed = None
