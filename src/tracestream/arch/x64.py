"""x64 64-bit architecture metadata."""
from __future__ import annotations
from typing import Dict
from unicorn import UC_ARCH_X86, UC_MODE_64
from unicorn import x86_const as uc
from capstone import CS_ARCH_X86, CS_MODE_64
from .base import Arch

REGS: Dict[str, int] = {
    "rax": uc.UC_X86_REG_RAX,
    "rbx": uc.UC_X86_REG_RBX,
    "rcx": uc.UC_X86_REG_RCX,
    "rdx": uc.UC_X86_REG_RDX,
    "rsi": uc.UC_X86_REG_RSI,
    "rdi": uc.UC_X86_REG_RDI,
    "rbp": uc.UC_X86_REG_RBP,
    "rsp": uc.UC_X86_REG_RSP,
    "r8": uc.UC_X86_REG_R8,
    "r9": uc.UC_X86_REG_R9,
    "r10": uc.UC_X86_REG_R10,
    "r11": uc.UC_X86_REG_R11,
    "r12": uc.UC_X86_REG_R12,
    "r13": uc.UC_X86_REG_R13,
    "r14": uc.UC_X86_REG_R14,
    "r15": uc.UC_X86_REG_R15,
    "rip": uc.UC_X86_REG_RIP,
    # unicorn reads the full 64-bit flags through EFLAGS
    "rflags": uc.UC_X86_REG_EFLAGS,
    "cs": uc.UC_X86_REG_CS,
    "ds": uc.UC_X86_REG_DS,
    "es": uc.UC_X86_REG_ES,
    "fs": uc.UC_X86_REG_FS,
    "gs": uc.UC_X86_REG_GS,
    "ss": uc.UC_X86_REG_SS,
    "fs_base": uc.UC_X86_REG_FS_BASE,
    "gs_base": uc.UC_X86_REG_GS_BASE,
}


class X64(Arch):
    """x64 64-bit CPU architecture (x86-64/AMD64)."""
    name = "x64"
    bits = 64
    uc_arch = UC_ARCH_X86
    uc_mode = UC_MODE_64
    cs_arch = CS_ARCH_X86
    cs_mode = CS_MODE_64

    @property
    def sp(self) -> int:
        return REGS["rsp"]

    @property
    def ip(self) -> int:
        return REGS["rip"]

    def regs(self) -> Dict[str, int]:
        return REGS
