# CHIP-8 machine configuration.
# Memory - 4096 bytes: the interpreter area (fonts live here), then the ROM from 0x200.
# Display - 64x32 pixels, each either on or off.
# CPU - Cowgod's CHIP-8 Technical reference http://devernay.free.fr/hacks/chip8/C8TECH10.HTM#0.0
#----------------------------------------------------------------------------------------------

# ---- Display ----
scale = 10
width, height = 64, 32
pixel_count = width * height
window_width, window_height = width * scale, height * scale

# ---- Timing ----
# one cycle per frame, 10 instructions per cycle -> ~600 instructions/s at 60Hz
frame_HZ = 60
instructions_per_cycle = 10

# ---- Memory ----
memory_size = 4096
program_start = 0x200
stack_depth = 16

# Standard CHIP-8 fontset (80 bytes)
fontset = [
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
]
glyph_size = 5

#make it true if you want the logs
logsOn = False


def log(*args):
    if logsOn:
        print(*args)


def set_logging(enabled):
    global logsOn
    logsOn = bool(enabled)
    return logsOn
