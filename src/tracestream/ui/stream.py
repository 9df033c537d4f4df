"""Streaming trace renderer: the entry point for event streams."""
from __future__ import annotations
import sys
from typing import Iterable, List, Optional, Union

from ..arch.base import Arch
from ..arch.factory import Factory
from ..core.config import RenderConfig
from ..core.events import (
    Event, FrameEvent, KeyframeEvent, JumpEvent, StepEvent, SyscallEvent,
)
from ..core.exceptions import NestingError, TraceError
from ..disasm.disassembler import Disassembler
from ..mem.memory import MemSim
from ..types import Addr, RegMap, SpRegMap, Writer
from ..utils.logger import log
from .render import Renderer
from .state import ShadowState, StateUpdater


class StreamUI:
    """Renders a trace event stream as "instruction -> side effects" lines.

    Side effects of an instruction arrive after its StepEvent, so each step
    is held as pending and only rendered when the next boundary (jump, step,
    syscall, keyframe or an explicit flush) shows its effects are complete.
    Rendering happens before the pending instruction is applied, so the
    bytes disassembled at pc are the pre-instruction bytes.

    Side effects that arrive with nothing pending (right after a jump or a
    syscall) are applied to the shadow state at once and not rendered.
    """

    def __init__(self, w: Optional[Writer] = None, arch: Union[str, Arch] = "x64",
                 disasm=None, config: Optional[RenderConfig] = None,
                 verbose: bool = False):
        """Initialize a replay session.

        Args:
            w: Output sink (default: sys.stdout)
            arch: Architecture name or metadata instance
            disasm: Object with disas(data, addr, arch) (default: capstone)
            config: Column layout (default: computed from arch)
            verbose: Enable verbose debug logging

        Raises:
            ArchError: If arch names an unknown architecture
        """
        log.set_verbose(verbose)
        self.arch = Factory.create(arch)
        self.config = config or RenderConfig.for_arch(self.arch)
        self.state = ShadowState(self.arch)
        self.updater = StateUpdater(self.state, self.config.max_depth)
        self.renderer = Renderer(w if w is not None else sys.stdout, self.state,
                                 self.config, disasm or Disassembler())
        # pending is the last unflushed StepEvent, cleared by flush()
        self.pending: Optional[StepEvent] = None
        self.effects: List[Event] = []
        log.debug(f"StreamUI: {self.arch!r}, inscol={self.config.inscol}, regcol={self.config.regcol}")

    # Shadow state views
    @property
    def pc(self) -> Addr:
        return self.state.pc

    @property
    def sp(self) -> Addr:
        return self.state.sp

    @property
    def regs(self) -> RegMap:
        return self.state.regs

    @property
    def spregs(self) -> SpRegMap:
        return self.state.spregs

    @property
    def mem(self) -> MemSim:
        return self.state.mem

    def feed(self, op: Event) -> None:
        """Consume one event (or a nested batch of events).

        Never raises for malformed input: over-deep nesting is logged and the
        rest of that event is dropped.
        """
        try:
            self._feed(op, 0)
        except TraceError as e:
            log.warning(f"StreamUI.feed: {type(op).__name__} truncated: {e}")

    def feed_all(self, ops: Iterable[Event]) -> None:
        """Feed events in order."""
        for op in ops:
            self.feed(op)

    def _feed(self, op: Event, depth: int) -> None:
        if depth > self.config.max_depth:
            raise NestingError(depth)

        if isinstance(op, FrameEvent):
            for v in op.ops:
                self._feed(v, depth + 1)
            return

        if isinstance(op, KeyframeEvent):
            # Queued instructions must render against pre-snapshot state
            self.flush()
            # Snapshots are applied but never printed
            for v in op.ops:
                self.updater.apply(v)
            return

        if isinstance(op, JumpEvent):
            self.flush()
            self.renderer.block_header(op.addr)
            self.updater.apply(op)
        elif isinstance(op, StepEvent):
            self.flush()
            self.pending = op
        elif isinstance(op, SyscallEvent):
            self.flush()
            self.renderer.syscall(op)
            self.updater.apply(op)
        elif self.pending is None:
            log.debug(f"StreamUI: {type(op).__name__} with no pending instruction, applied unrendered")
            self.updater.apply(op)
        else:
            # Everything else is a side effect of the pending instruction
            self.effects.append(op)

    def flush(self) -> None:
        """Print and clear the pending instruction and its side effects."""
        if self.pending is None:
            return
        self.renderer.instruction(self.state.pc, self.pending.size, self.effects)
        self.updater.apply(self.pending)
        for op in self.effects:
            self.updater.apply(op)
        self.effects.clear()
        self.pending = None

    def __enter__(self) -> "StreamUI":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.flush()


def replay(ops: Iterable[Event], w: Optional[Writer] = None,
           arch: Union[str, Arch] = "x64", **kwargs) -> StreamUI:
    """Render a whole event stream and flush the final instruction.

    Returns:
        The StreamUI, for inspecting the reconstructed state
    """
    with StreamUI(w, arch, **kwargs) as ui:
        ui.feed_all(ops)
    return ui
