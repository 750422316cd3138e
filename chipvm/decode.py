"""CHIP-8 instruction decoding and disassembly."""

from chex import dataclass


@dataclass(frozen=True)
class DecodedInstruction:
    """Operand fields of one instruction word.

    Fields are plain ints when decoding on the host and traced scalars
    inside compiled code.
    """
    raw: int
    opcode: int  # Family, top nibble
    x: int       # VX register index
    y: int       # VY register index
    n: int       # Low nibble: sprite height or sub-opcode
    nn: int      # Low byte: immediate or sub-opcode
    nnn: int     # Low 12 bits: address


def decode(instruction: int) -> DecodedInstruction:
    """Split a 16-bit instruction word into its operand fields."""
    return DecodedInstruction(
        raw=instruction,
        opcode=(instruction >> 12) & 0xF,
        x=(instruction >> 8) & 0xF,
        y=(instruction >> 4) & 0xF,
        n=instruction & 0xF,
        nn=instruction & 0xFF,
        nnn=instruction & 0xFFF,
    )


_ALU_MNEMONICS = {
    0x0: "LD", 0x1: "OR", 0x2: "AND", 0x3: "XOR", 0x4: "ADD",
    0x5: "SUB", 0x6: "SHR", 0x7: "SUBN", 0xE: "SHL",
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

_FORMATS = {
    0x1: "JP {nnn:03X}",
    0x2: "CALL {nnn:03X}",
    0x3: "SE V{x:X}, {nn:02X}",
    0x4: "SNE V{x:X}, {nn:02X}",
    0x6: "LD V{x:X}, {nn:02X}",
    0x7: "ADD V{x:X}, {nn:02X}",
    0xA: "LD I, {nnn:03X}",
    0xB: "JP V0, {nnn:03X}",
    0xC: "RND V{x:X}, {nn:02X}",
    0xD: "DRW V{x:X}, V{y:X}, {n:X}",
}


def disassemble(instruction: int) -> str:
    """Assembly text of an instruction word, e.g. `DRW V0, V1, 5`.

    Undefined instructions disassemble to `??? XXXX`.
    """
    d = decode(int(instruction))
    fields = dict(x=d.x, y=d.y, n=d.n, nn=d.nn, nnn=d.nnn)

    if d.opcode in _FORMATS:
        return _FORMATS[d.opcode].format(**fields)
    if d.opcode == 0x0:
        return {0x00E0: "CLS", 0x00EE: "RET"}.get(d.raw, f"SYS {d.nnn:03X}")
    if d.opcode in (0x5, 0x9) and d.n == 0:
        return f"{'SE' if d.opcode == 0x5 else 'SNE'} V{d.x:X}, V{d.y:X}"
    if d.opcode == 0x8 and d.n in _ALU_MNEMONICS:
        return f"{_ALU_MNEMONICS[d.n]} V{d.x:X}, V{d.y:X}"
    if d.opcode == 0xE and d.nn in (0x9E, 0xA1):
        return f"{'SKP' if d.nn == 0x9E else 'SKNP'} V{d.x:X}"
    if d.opcode == 0xF and d.nn in _MISC_FORMATS:
        return _MISC_FORMATS[d.nn].format(**fields)
    return f"??? {d.raw:04X}"
