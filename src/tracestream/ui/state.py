"""Shadow state reconstructed from trace events."""
from __future__ import annotations
from typing import Callable, Dict, Iterable, Optional, Type, TYPE_CHECKING

from ..core.events import (
    Event, FrameEvent, KeyframeEvent, JumpEvent, StepEvent,
    RegisterWriteEvent, SpecialRegisterWriteEvent,
    MemoryMapEvent, MemoryUnmapEvent, MemoryWriteEvent, MemoryReadEvent,
    SyscallEvent, ExitEvent,
)
from ..core.exceptions import NestingError, TraceError
from ..mem.memory import MemSim
from ..types import Addr, RegMap, SpRegMap
from ..utils.constants import MAX_DEPTH
from ..utils.logger import log

if TYPE_CHECKING:
    from ..arch.base import Arch


class ShadowState:
    """The replay's own copy of registers and memory.

    Derived purely from the event stream and used only for rendering; it is
    never the emulator's authoritative state.
    """

    def __init__(self, arch: "Arch", mem: Optional[MemSim] = None, pc: Addr = 0):
        self.arch = arch
        self.mem = mem if mem is not None else MemSim(arch)
        self.regs: RegMap = {}
        self.spregs: SpRegMap = {}
        self._mask = (1 << arch.bits) - 1
        self.pc = pc
        self.sp = 0

    @property
    def pc(self) -> Addr:
        return self._pc

    @pc.setter
    def pc(self, value: Addr) -> None:
        # Program counter wraps at the architecture width
        self._pc = value & self._mask

    def __repr__(self) -> str:
        return f"<ShadowState pc=0x{self.pc:x} sp=0x{self.sp:x} regs={len(self.regs)}>"


class StateUpdater:
    """Applies events to a ShadowState. Never renders.

    FrameEvent and KeyframeEvent are normally unpacked by the consumer; when
    they turn up nested (inside a keyframe or a syscall body) they are applied
    here as plain batches.
    """

    def __init__(self, state: ShadowState, max_depth: int = MAX_DEPTH):
        self.state = state
        self.max_depth = max_depth
        self._handlers: Dict[Type[Event], Callable] = {
            FrameEvent: self._batch,
            KeyframeEvent: self._batch,
            SyscallEvent: self._batch,
            JumpEvent: self._jump,
            StepEvent: self._step,
            RegisterWriteEvent: self._reg,
            SpecialRegisterWriteEvent: self._spreg,
            MemoryMapEvent: self._map,
            MemoryUnmapEvent: self._unmap,
            MemoryWriteEvent: self._write,
        }

    # Variants that carry nothing to apply
    IGNORED = (MemoryReadEvent, ExitEvent)

    def handled(self):
        """Every event type this updater accepts."""
        return tuple(self._handlers) + self.IGNORED

    def apply(self, op: Event) -> None:
        """Apply one event. Failures are logged, never raised."""
        try:
            self._apply(op, 0)
        except TraceError as e:
            log.warning(f"StateUpdater.apply: {type(op).__name__} skipped: {e}")

    def apply_all(self, ops: Iterable[Event]) -> None:
        """Apply events in order."""
        for op in ops:
            self.apply(op)

    def _apply(self, op: Event, depth: int) -> None:
        handler = self._handlers.get(type(op))
        if handler is not None:
            handler(op, depth)
        elif not isinstance(op, self.IGNORED):
            log.warning(f"StateUpdater: unknown event {op!r}")

    def _batch(self, op, depth: int) -> None:
        if depth >= self.max_depth:
            raise NestingError(depth + 1)
        for v in op.ops:
            self._apply(v, depth + 1)

    def _jump(self, op: JumpEvent, depth: int) -> None:
        self.state.pc = op.addr

    def _step(self, op: StepEvent, depth: int) -> None:
        self.state.pc += op.size

    def _reg(self, op: RegisterWriteEvent, depth: int) -> None:
        if op.num == self.state.arch.sp:
            self.state.sp = op.val
        self.state.regs[op.num] = op.val

    def _spreg(self, op: SpecialRegisterWriteEvent, depth: int) -> None:
        self.state.spregs[op.num] = op.val

    def _map(self, op: MemoryMapEvent, depth: int) -> None:
        self.state.mem.map(op.addr, op.size, op.prot, op.zero)

    def _unmap(self, op: MemoryUnmapEvent, depth: int) -> None:
        self.state.mem.unmap(op.addr, op.size)

    def _write(self, op: MemoryWriteEvent, depth: int) -> None:
        self.state.mem.write(op.addr, op.data)
