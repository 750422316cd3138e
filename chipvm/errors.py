"""Exceptions raised by the CHIP-8 virtual machine."""

from chipvm.constants import (
    MAX_ROM_SIZE, FAULT_NONE, FAULT_STACK_OVERFLOW, FAULT_STACK_UNDERFLOW,
    FAULT_INVALID_INSTRUCTION,
)
from chipvm.decode import disassemble


class ChipVMError(Exception):
    """Base class for all virtual machine errors."""


class RomTooLarge(ChipVMError):
    """ROM does not fit in the program region."""

    def __init__(self, size: int):
        self.size = size
        super().__init__(f"rom size too big ({size} bytes), should be <= {MAX_ROM_SIZE} bytes")


class AllocationFailure(ChipVMError):
    """Machine storage could not be allocated."""


class MachineFault(ChipVMError):
    """Unrecoverable fault caused by the running program.

    Attributes:
        address: Address of the faulting instruction
        instruction: The faulting 16-bit instruction word
    """

    reason = "machine fault"

    def __init__(self, address: int, instruction: int):
        self.address = address
        self.instruction = instruction
        super().__init__(
            f"{self.reason}: {instruction:04X} ({disassemble(instruction)}) at 0x{address:03X}"
        )


class StackOverflow(MachineFault):
    reason = "call stack overflow"


class StackUnderflow(MachineFault):
    reason = "return with empty call stack"


class InvalidInstruction(MachineFault):
    reason = "invalid instruction"


FAULTS = {
    FAULT_STACK_OVERFLOW: StackOverflow,
    FAULT_STACK_UNDERFLOW: StackUnderflow,
    FAULT_INVALID_INSTRUCTION: InvalidInstruction,
}


def raise_for_fault(state) -> None:
    """Raise the exception matching the fault latched in `state`, if any."""
    code = int(state.fault)
    if code == FAULT_NONE:
        return
    address = int(state.pc)
    instruction = (int(state.memory[address]) << 8) | int(state.memory[address + 1])
    raise FAULTS[code](address, instruction)
