"""Constants shared by the memory simulation and the renderer."""
from __future__ import annotations
from unicorn import (
    UC_PROT_NONE, UC_PROT_READ, UC_PROT_WRITE, UC_PROT_EXEC, UC_PROT_ALL,
)

# Memory layout
PAGE = 0x1000

# Output layout
INS_COL = 60  # Width of the disassembly column
REG_PAD = 5  # ' = ' plus the two spaces separating the register column

# Nesting guard for Frame/Keyframe/Syscall batches
MAX_DEPTH = 64


def align_down(addr: int, align: int = PAGE) -> int:
    """Round address down to alignment boundary."""
    return addr & ~(align - 1)


def align_up(addr: int, align: int = PAGE) -> int:
    """Round address up to alignment boundary."""
    return (addr + align - 1) & ~(align - 1)


def prot_str(prot: int) -> str:
    """Convert protection flags to readable string."""
    perms = []
    if prot & UC_PROT_READ:
        perms.append('R')
    if prot & UC_PROT_WRITE:
        perms.append('W')
    if prot & UC_PROT_EXEC:
        perms.append('X')
    return ''.join(perms) if perms else 'NONE'


__all__ = [
    "UC_PROT_NONE", "UC_PROT_READ", "UC_PROT_WRITE", "UC_PROT_EXEC", "UC_PROT_ALL",
    "PAGE", "INS_COL", "REG_PAD", "MAX_DEPTH",
    "align_down", "align_up", "prot_str",
]
