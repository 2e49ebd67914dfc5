# CHIP-8 execution engine.
# Memory - 4096 bytes. Fonts at 0x000, the ROM is loaded at 0x200.
# Registers - V0..VF (8 bit, VF doubles as carry/borrow/collision flag), I (16 bit), PC (16 bit).
# Stack - up to 16 return addresses.
# Timers - delay and sound, decremented once per cycle (not once per instruction).
#----------------------------------------------------------------------------------------------
# One cycle runs a batch of 10 instructions and then ticks the timers. The host calls it
# once per frame (60Hz), which works out to roughly 600 instructions per second.

import random

from .config import (
    fontset, glyph_size, memory_size, program_start, stack_depth,
    instructions_per_cycle, log,
)
from .errors import DecodeError, MemoryBoundsError, StackOverflowError, StackUnderflowError
from .framebuffer import FrameBuffer
from .keypad import InputLatch


class Chip8:
    def __init__(self, framebuffer=None, keypad=None, rng=None):
        self.framebuffer = framebuffer if framebuffer is not None else FrameBuffer()
        self.keypad = keypad if keypad is not None else InputLatch()
        self.rng = rng if rng is not None else random.Random()

        # Prepare opcode function maps
        self.setup_funcmap()
        self.reset()

    def reset(self):
        # ---- CPU state ----
        self.memory = bytearray(memory_size)
        self.V = [0] * 16           # 16 general-purpose registers
        self.I = 0                  # index register (memory pointer)
        self.pc = program_start     # program counter starts at 0x200
        self.stack = []             # return addresses for subroutine calls
        self.delay_timer = 0
        self.sound_timer = 0
        self.opcode = 0
        self.cycle_count = 0

        # Load fontset into memory
        self.memory[:len(fontset)] = bytes(fontset)

        self.framebuffer.clear()
        self.keypad.clear()

    # ---- Load ROM ----
    def load(self, data):
        data = bytes(data)
        end = program_start + len(data)
        if end > memory_size:
            raise MemoryBoundsError(end - 1)
        self.memory[program_start:end] = data
        log("Loaded %d bytes at 0x%03X" % (len(data), program_start))

    def load_rom(self, path):
        log("Loading ROM:", path)
        with open(path, "rb") as f:
            self.load(f.read())

    # ---- Memory access ----
    def read_byte(self, address):
        if not 0 <= address < memory_size:
            raise MemoryBoundsError(address, self.pc)
        return self.memory[address]

    def write_byte(self, address, value):
        if not 0 <= address < memory_size:
            raise MemoryBoundsError(address, self.pc)
        self.memory[address] = value & 0xFF

    # ---- Cycle ----
    def cycle(self):
        for _ in range(instructions_per_cycle):
            self.step()

        # timers tick once per cycle, saturating at zero
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1
            if self.sound_timer == 0:
                log("Sound timer expired")
        self.cycle_count += 1

    def fetch(self):
        return (self.read_byte(self.pc) << 8) | self.read_byte(self.pc + 1)

    def step(self):
        """Fetch, decode and execute a single instruction; returns the instruction word."""
        self.opcode = self.fetch()

        # Extract operands
        self.nnn = self.opcode & 0x0FFF
        self.nn = self.opcode & 0x00FF
        self.n = self.opcode & 0x000F
        self.x = (self.opcode & 0x0F00) >> 8
        self.y = (self.opcode & 0x00F0) >> 4

        # handlers clear this when they set the PC themselves
        self.advance_pc = True

        self.funcmap[self.opcode >> 12]()

        if self.advance_pc:
            self.pc = (self.pc + 2) & 0xFFFF
        return self.opcode

    def skip(self):
        self.pc = (self.pc + 2) & 0xFFFF

    def dispatch(self, table, key):
        handler = table.get(key)
        if handler is None:
            raise DecodeError(self.opcode, self.pc)
        handler()

    # ---- Opcode function maps ----
    def setup_funcmap(self):
        self.funcmap = {
            0x0: self._0xxx,  # 00E0 / 00EE - Clear screen / Return from subroutine
            0x1: self._1nnn,  # 1nnn - Jump to a specific memory address
            0x2: self._2nnn,  # 2nnn - Call a function (subroutine) at a memory address
            0x3: self._3xnn,  # 3xnn - Skip next instruction if a register equals a number
            0x4: self._4xnn,  # 4xnn - Skip next instruction if a register does NOT equal a number
            0x5: self._5xy0,  # 5xy0 - Skip next instruction if two registers are equal
            0x6: self._6xnn,  # 6xnn - Set a register to a number
            0x7: self._7xnn,  # 7xnn - Add a number to a register
            0x8: self._8xxx,  # 8xy0..8xyE - Math and logic between two registers
            0x9: self._9xy0,  # 9xy0 - Skip next instruction if two registers are NOT equal
            0xA: self._Annn,  # Annn - Set the memory pointer I
            0xB: self._Bnnn,  # Bnnn - Jump to an address plus V0
            0xC: self._Cxnn,  # Cxnn - Random number ANDed with a value
            0xD: self._Dxyn,  # Dxyn - Draw a sprite at (Vx, Vy)
            0xE: self._Exxx,  # Ex9E / ExA1 - Skip on key state
            0xF: self._Fxxx,  # Fx07..Fx65 - timers, memory and keys
        }
        self.funcmap_0 = {
            0x0E0: self._00E0,
            0x0EE: self._00EE,
        }
        self.funcmap_8 = {
            0x0: self._8xy0,
            0x1: self._8xy1,
            0x2: self._8xy2,
            0x3: self._8xy3,
            0x4: self._8xy4,
            0x5: self._8xy5,
            0x6: self._8xy6,
            0x7: self._8xy7,
            0xE: self._8xyE,
        }
        self.funcmap_E = {
            0x9E: self._Ex9E,
            0xA1: self._ExA1,
        }
        self.funcmap_F = {
            0x07: self._Fx07,
            0x0A: self._Fx0A,
            0x15: self._Fx15,
            0x18: self._Fx18,
            0x1E: self._Fx1E,
            0x29: self._Fx29,
            0x33: self._Fx33,
            0x55: self._Fx55,
            0x65: self._Fx65,
        }

    # ---- Opcode Handlers ----

    def _0xxx(self):
        self.dispatch(self.funcmap_0, self.nnn)

    def _8xxx(self):
        self.dispatch(self.funcmap_8, self.n)

    def _Exxx(self):
        self.dispatch(self.funcmap_E, self.nn)

    def _Fxxx(self):
        self.dispatch(self.funcmap_F, self.nn)

    # 00E0 - CLS
    def _00E0(self):
        self.framebuffer.clear()
        log("Clear the display (all pixels turned off)")

    # 00EE - RET, lands on the instruction after the CALL
    def _00EE(self):
        if not self.stack:
            raise StackUnderflowError(self.pc)
        self.pc = self.stack.pop()
        log("Return to", hex(self.pc))

    # 1nnn - Jump to address nnn
    def _1nnn(self):
        self.pc = self.nnn
        self.advance_pc = False
        log("Jump to address", hex(self.nnn))

    # 2nnn - Call subroutine at nnn
    def _2nnn(self):
        if len(self.stack) >= stack_depth:
            raise StackOverflowError(self.pc)
        self.stack.append(self.pc)
        self.pc = self.nnn
        self.advance_pc = False
        log("Call subroutine at", hex(self.nnn))

    # 3xnn - Skip next instruction if Vx == nn
    def _3xnn(self):
        if self.V[self.x] == self.nn:
            self.skip()
            log(f"Skip next instruction: V{self.x:X} == {self.nn}")

    # 4xnn - Skip next instruction if Vx != nn
    def _4xnn(self):
        if self.V[self.x] != self.nn:
            self.skip()
            log(f"Skip next instruction: V{self.x:X} != {self.nn}")

    # 5xy0 - Skip next instruction if Vx == Vy
    def _5xy0(self):
        if self.n != 0:
            return
        if self.V[self.x] == self.V[self.y]:
            self.skip()
            log(f"Skip next instruction: V{self.x:X} == V{self.y:X}")

    # 6xnn - Set Vx = nn
    def _6xnn(self):
        self.V[self.x] = self.nn
        log(f"Set V{self.x:X} = {self.nn}")

    # 7xnn - Add immediate, no carry
    def _7xnn(self):
        self.V[self.x] = (self.V[self.x] + self.nn) & 0xFF
        log(f"Add {self.nn} to V{self.x:X}: {self.V[self.x]}")

    # 8xy0..8xyE
    # The flag is written before the result, so with x == F the result wins.
    def _8xy0(self):
        self.V[self.x] = self.V[self.y]
        log(f"Copy V{self.y:X} into V{self.x:X}: {self.V[self.x]}")

    def _8xy1(self):
        self.V[self.x] |= self.V[self.y]
        log(f"V{self.x:X} = V{self.x:X} OR V{self.y:X} -> {self.V[self.x]}")

    def _8xy2(self):
        self.V[self.x] &= self.V[self.y]
        log(f"V{self.x:X} = V{self.x:X} AND V{self.y:X} -> {self.V[self.x]}")

    def _8xy3(self):
        self.V[self.x] ^= self.V[self.y]
        log(f"V{self.x:X} = V{self.x:X} XOR V{self.y:X} -> {self.V[self.x]}")

    def _8xy4(self):
        s = self.V[self.x] + self.V[self.y]
        self.V[0xF] = 1 if s > 0xFF else 0
        self.V[self.x] = s & 0xFF
        log(f"Add V{self.y:X} to V{self.x:X}: result {self.V[self.x]}, carry={self.V[0xF]}")

    def _8xy5(self):
        vx, vy = self.V[self.x], self.V[self.y]
        self.V[0xF] = 1 if vx >= vy else 0
        self.V[self.x] = (vx - vy) & 0xFF
        log(f"Subtract V{self.y:X} from V{self.x:X}: result {self.V[self.x]}, NOT borrow={self.V[0xF]}")

    def _8xy6(self):
        vx = self.V[self.x]
        self.V[0xF] = vx & 1
        self.V[self.x] = vx >> 1
        log(f"Shift V{self.x:X} right by 1: {self.V[self.x]}, least significant bit={vx & 1}")

    def _8xy7(self):
        vx, vy = self.V[self.x], self.V[self.y]
        self.V[0xF] = 1 if vy >= vx else 0
        self.V[self.x] = (vy - vx) & 0xFF
        log(f"Set V{self.x:X} = V{self.y:X} - V{self.x:X}: result {self.V[self.x]}, NOT borrow={self.V[0xF]}")

    def _8xyE(self):
        vx = self.V[self.x]
        self.V[0xF] = (vx >> 7) & 1
        self.V[self.x] = (vx << 1) & 0xFF
        log(f"Shift V{self.x:X} left by 1: {self.V[self.x]}, most significant bit={(vx >> 7) & 1}")

    # 9xy0 - Skip next instruction if Vx != Vy
    def _9xy0(self):
        if self.n != 0:
            return
        if self.V[self.x] != self.V[self.y]:
            self.skip()
            log(f"Skip next instruction: V{self.x:X} != V{self.y:X}")

    # Annn - Set I = nnn
    def _Annn(self):
        self.I = self.nnn
        log(f"Set I = {self.I:03X}")

    # Bnnn - Jump to address nnn + V0
    def _Bnnn(self):
        self.pc = (self.nnn + self.V[0]) & 0xFFFF
        self.advance_pc = False
        log(f"Jump to address {self.nnn:03X} + V0 = {self.pc:03X}")

    # Cxnn - Vx = random byte AND nn
    def _Cxnn(self):
        self.V[self.x] = self.rng.getrandbits(8) & self.nn
        log(f"Set V{self.x:X} = random_byte & {self.nn} -> {self.V[self.x]}")

    # Dxyn - Draw an n-row sprite from memory[I] at (Vx, Vy), VF = collision
    def _Dxyn(self):
        self.V[0xF] = 0
        px = self.V[self.x]
        py = self.V[self.y]
        fb = self.framebuffer
        for row in range(self.n):
            sprite = self.read_byte(self.I + row)
            for bit in range(8):
                if sprite & (0x80 >> bit):
                    if fb.toggle(fb.index(px + bit, py + row)):
                        self.V[0xF] = 1
        log(f"Drew sprite at ({px}, {py}), collision={self.V[0xF]}")

    # Ex9E - Skip if key Vx is pressed. The press is consumed.
    def _Ex9E(self):
        if self.keypad.is_pressed(self.V[self.x]):
            self.skip()
            self.keypad.clear()
            log(f"Key {self.V[self.x]:X} pressed, skip")

    # ExA1 - Skip if key Vx is not pressed
    def _ExA1(self):
        if not self.keypad.is_pressed(self.V[self.x]):
            self.skip()

    # Fx07 - Vx = delay timer
    def _Fx07(self):
        self.V[self.x] = self.delay_timer

    # Fx0A - Wait for a key press, store it in Vx
    def _Fx0A(self):
        if self.keypad.pressed is None:
            # stall: the instruction runs again next time
            self.advance_pc = False
            return
        self.V[self.x] = self.keypad.pressed
        self.keypad.clear()
        log(f"Key {self.V[self.x]:X} stored in V{self.x:X}")

    # Fx15 - delay timer = Vx
    def _Fx15(self):
        self.delay_timer = self.V[self.x]

    # Fx18 - sound timer = Vx
    def _Fx18(self):
        self.sound_timer = self.V[self.x]

    # Fx1E - I += Vx, VF untouched
    def _Fx1E(self):
        self.I = (self.I + self.V[self.x]) & 0xFFFF

    # Fx29 - I = address of the font glyph for Vx
    def _Fx29(self):
        self.I = self.V[self.x] * glyph_size
        log(f"Set I = font glyph {self.V[self.x]:X} at {self.I:03X}")

    # Fx33 - BCD of Vx at I, I+1, I+2
    def _Fx33(self):
        val = self.V[self.x]
        self.write_byte(self.I, val // 100)
        self.write_byte(self.I + 1, (val // 10) % 10)
        self.write_byte(self.I + 2, val % 10)

    # Fx55 - Store V0..Vx at I
    def _Fx55(self):
        for i in range(self.x + 1):
            self.write_byte(self.I + i, self.V[i])

    # Fx65 - Load V0..Vx from I
    def _Fx65(self):
        for i in range(self.x + 1):
            self.V[i] = self.read_byte(self.I + i)
