"""Text rendering of instructions, blocks and syscalls."""
from __future__ import annotations
from typing import List, Sequence, TYPE_CHECKING

from ..core.events import (
    Event, RegisterWriteEvent, SpecialRegisterWriteEvent,
    MemoryReadEvent, MemoryWriteEvent, MemoryMapEvent, MemoryUnmapEvent,
    ExitEvent, SyscallEvent,
)
from ..core.exceptions import DisasmError
from ..types import Addr, Size, Writer
from ..utils.logger import log

if TYPE_CHECKING:
    from ..core.config import RenderConfig
    from .state import ShadowState


def pad(s: str, to: int) -> str:
    """Spaces needed to widen s to `to` columns; empty if already that wide."""
    if len(s) >= to:
        return ""
    return " " * (to - len(s))


class Renderer:
    """Formats flushed instructions and their side effects as aligned text.

    Output layout::

        <disassembly, padded to inscol> | <first register change> | <first memory access>
        <inscol spaces> + <next register change> + <next memory access>

    The memory column and its separator are omitted when there is nothing
    to show. Disassembly text that already fills the instruction column is left
    unpadded, so the following columns shift right.
    """

    # Side effects with a column of their own
    EFFECTS = (RegisterWriteEvent, SpecialRegisterWriteEvent, MemoryReadEvent, MemoryWriteEvent)
    # Side effects that have no column of their own
    SILENT = (MemoryMapEvent, MemoryUnmapEvent, ExitEvent)

    def __init__(self, w: Writer, state: "ShadowState", config: "RenderConfig", disasm):
        self.w = w
        self.state = state
        self.config = config
        self.disasm = disasm
        self._mask = (1 << state.arch.bits) - 1

    def block_header(self, addr: Addr) -> None:
        """Mark the start of a basic block."""
        self.w.write(f"\n{addr:#x}\n")

    def syscall(self, op: SyscallEvent) -> None:
        """Render a syscall summary line; its nested effects are not listed."""
        args = ", ".join(f"{v & self._mask:#x}" for v in op.args)
        self.w.write(f"syscall({op.num}, [{args}]) = {op.ret & self._mask}\n")

    def _ins_text(self, pc: Addr, size: Size) -> str:
        insmem = self.state.mem.read(pc, bytearray(size))
        try:
            return self.disasm.disas(bytes(insmem), pc, self.state.arch)
        except DisasmError as e:
            log.debug(f"Renderer: {e}")
            return f"{pc:#x}: {insmem.hex()}"

    def reg_name(self, num: int) -> str:
        name = self.state.arch.reg_name(num)
        return name if name is not None else str(num)

    def instruction(self, pc: Addr, size: Size, effects: Sequence[Event]) -> None:
        """Render one instruction and the side effects attributed to it.

        Memory is read before the instruction's own effects are applied, so
        the bytes at pc are the ones that were executed.
        """
        cfg = self.config
        ins = self._ins_text(pc, size)

        regs: List[str] = []
        mem: List[str] = []
        for op in effects:
            if isinstance(op, RegisterWriteEvent):
                regs.append(cfg.reg(self.reg_name(op.num), op.val & self._mask))
            elif isinstance(op, SpecialRegisterWriteEvent):
                self.w.write("<unimplemented special register>\n")
            elif isinstance(op, MemoryReadEvent):
                mem.append(f"R {op.addr:x}")
            elif isinstance(op, MemoryWriteEvent):
                mem.append(f"W {op.addr:x}")
            elif not isinstance(op, self.SILENT):
                log.warning(f"Renderer: unexpected side effect {op!r}")

        if regs:
            reg = regs[0] + pad(regs[0], cfg.regcol)
        else:
            reg = " " * cfg.regcol
        ins += pad(ins, cfg.inscol)

        if mem:
            self.w.write(f"{ins} | {reg} | {mem[0]}\n")
        else:
            self.w.write(f"{ins} | {reg}\n")

        # Extra register changes, paired with the remaining memory accesses
        inspad = " " * cfg.inscol
        for i, r in enumerate(regs[1:], 1):
            if i < len(mem):
                self.w.write(f"{inspad} + {r} + {mem[i]}\n")
            else:
                self.w.write(f"{inspad} + {r}\n")
