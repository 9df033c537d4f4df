"""x86 32-bit architecture metadata."""
from __future__ import annotations
from typing import Dict
from unicorn import UC_ARCH_X86, UC_MODE_32
from unicorn import x86_const as uc
from capstone import CS_ARCH_X86, CS_MODE_32
from .base import Arch

REGS: Dict[str, int] = {
    "eax": uc.UC_X86_REG_EAX,
    "ebx": uc.UC_X86_REG_EBX,
    "ecx": uc.UC_X86_REG_ECX,
    "edx": uc.UC_X86_REG_EDX,
    "esi": uc.UC_X86_REG_ESI,
    "edi": uc.UC_X86_REG_EDI,
    "ebp": uc.UC_X86_REG_EBP,
    "esp": uc.UC_X86_REG_ESP,
    "eip": uc.UC_X86_REG_EIP,
    "eflags": uc.UC_X86_REG_EFLAGS,
    "cs": uc.UC_X86_REG_CS,
    "ds": uc.UC_X86_REG_DS,
    "es": uc.UC_X86_REG_ES,
    "fs": uc.UC_X86_REG_FS,
    "gs": uc.UC_X86_REG_GS,
    "ss": uc.UC_X86_REG_SS,
}


class X86(Arch):
    """x86 32-bit CPU architecture."""
    name = "x86"
    bits = 32
    uc_arch = UC_ARCH_X86
    uc_mode = UC_MODE_32
    cs_arch = CS_ARCH_X86
    cs_mode = CS_MODE_32

    @property
    def sp(self) -> int:
        return REGS["esp"]

    @property
    def ip(self) -> int:
        return REGS["eip"]

    def regs(self) -> Dict[str, int]:
        return REGS
