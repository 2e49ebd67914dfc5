"""Fatal machine faults. Every one of these halts the virtual machine."""


class Chip8Error(Exception):
    pass


class DecodeError(Chip8Error):
    def __init__(self, opcode, pc):
        self.opcode = opcode
        self.pc = pc
        super().__init__("Unknown opcode %04X at PC 0x%03X" % (opcode, pc))


class StackOverflowError(Chip8Error):
    def __init__(self, pc):
        self.pc = pc
        super().__init__("Stack overflow on CALL at PC 0x%03X" % pc)


class StackUnderflowError(Chip8Error):
    def __init__(self, pc):
        self.pc = pc
        super().__init__("Stack underflow on RET at PC 0x%03X" % pc)


class MemoryBoundsError(Chip8Error):
    def __init__(self, address, pc=None):
        self.address = address
        self.pc = pc
        if pc is None:
            msg = "Memory access out of bounds: 0x%04X" % address
        else:
            msg = "Memory access out of bounds: 0x%04X at PC 0x%03X" % (address, pc)
        super().__init__(msg)
