"""Mnemonic rendering of decoded instructions."""

from __future__ import annotations

from ..decoder import DecodedInstr, OpcodeClass, decode

_ALU_MNEMONICS = {
    0x0: "LD",
    0x1: "OR",
    0x2: "AND",
    0x3: "XOR",
    0x4: "ADD",
    0x5: "SUB",
    0x6: "SHR",
    0x7: "SUBN",
    0xE: "SHL",
}

_MISC_FORMATS = {
    0x07: "LD V{x:X}, DT",
    0x0A: "LD V{x:X}, K",
    0x15: "LD DT, V{x:X}",
    0x18: "LD ST, V{x:X}",
    0x1E: "ADD I, V{x:X}",
    0x29: "LD F, V{x:X}",
    0x33: "LD B, V{x:X}",
    0x55: "LD [I], V{x:X}",
    0x65: "LD V{x:X}, [I]",
}


def disassemble(instr: DecodedInstr | int) -> str:
    """Return a Cowgod-style mnemonic, or ``DW 0xNNNN`` for unknown words."""
    if isinstance(instr, int):
        instr = decode(instr)
    x, y = instr.x, instr.y

    match instr.kind:
        case OpcodeClass.SYSTEM:
            match instr.raw:
                case 0x00E0:
                    return "CLS"
                case 0x00EE:
                    return "RET"
                case _:
                    return f"SYS 0x{instr.nnn:03X}"
        case OpcodeClass.JUMP:
            return f"JP 0x{instr.nnn:03X}"
        case OpcodeClass.CALL:
            return f"CALL 0x{instr.nnn:03X}"
        case OpcodeClass.SKIP_EQ_IMM:
            return f"SE V{x:X}, 0x{instr.nn:02X}"
        case OpcodeClass.SKIP_NE_IMM:
            return f"SNE V{x:X}, 0x{instr.nn:02X}"
        case OpcodeClass.SKIP_EQ_REG if instr.n == 0:
            return f"SE V{x:X}, V{y:X}"
        case OpcodeClass.LOAD_IMM:
            return f"LD V{x:X}, 0x{instr.nn:02X}"
        case OpcodeClass.ADD_IMM:
            return f"ADD V{x:X}, 0x{instr.nn:02X}"
        case OpcodeClass.ALU if instr.n in _ALU_MNEMONICS:
            return f"{_ALU_MNEMONICS[instr.n]} V{x:X}, V{y:X}"
        case OpcodeClass.SKIP_NE_REG if instr.n == 0:
            return f"SNE V{x:X}, V{y:X}"
        case OpcodeClass.LOAD_INDEX:
            return f"LD I, 0x{instr.nnn:03X}"
        case OpcodeClass.JUMP_OFFSET:
            return f"JP V0, 0x{instr.nnn:03X}"
        case OpcodeClass.RANDOM:
            return f"RND V{x:X}, 0x{instr.nn:02X}"
        case OpcodeClass.DRAW:
            return f"DRW V{x:X}, V{y:X}, {instr.n}"
        case OpcodeClass.KEY if instr.nn == 0x9E:
            return f"SKP V{x:X}"
        case OpcodeClass.KEY if instr.nn == 0xA1:
            return f"SKNP V{x:X}"
        case OpcodeClass.MISC if instr.nn in _MISC_FORMATS:
            return _MISC_FORMATS[instr.nn].format(x=x)
    return f"DW 0x{instr.raw:04X}"
