"""Capstone-backed instruction disassembly."""
from __future__ import annotations
from typing import Dict, Tuple, TYPE_CHECKING
from capstone import Cs, CsError
from ..core.exceptions import DisasmError
from ..types import Addr, Data

if TYPE_CHECKING:
    from ..arch.base import Arch


class Disassembler:
    """Renders raw instruction bytes as text.

    One Capstone handle is kept per (arch, mode) pair. Output is one
    ``0x<addr>: <mnemonic> <operands>`` line per decoded instruction.
    """

    def __init__(self) -> None:
        self._handles: Dict[Tuple[int, int], Cs] = {}

    def _handle(self, arch: "Arch") -> Cs:
        key = (arch.cs_arch, arch.cs_mode)
        md = self._handles.get(key)
        if md is None:
            md = Cs(arch.cs_arch, arch.cs_mode)
            self._handles[key] = md
        return md

    def disas(self, data: Data, addr: Addr, arch: "Arch") -> str:
        """Disassemble data located at addr.

        Raises:
            DisasmError: If nothing decodes or trailing bytes are left over
        """
        data = bytes(data)
        if not data:
            raise DisasmError(addr, data, "empty instruction")
        try:
            md = self._handle(arch)
            insns = list(md.disasm(data, addr))
        except CsError as e:
            raise DisasmError(addr, data, str(e)) from e

        if not insns:
            raise DisasmError(addr, data)
        used = sum(insn.size for insn in insns)
        if used != len(data):
            raise DisasmError(addr, data, f"decoded {used} of {len(data)} bytes")

        return "\n".join(
            f"0x{insn.address:x}: {insn.mnemonic} {insn.op_str}".rstrip()
            for insn in insns
        )
