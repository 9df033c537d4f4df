"""tracestream: render emulator trace event streams as readable logs.

Consumes jump/step/register/memory/syscall events, keeps a shadow copy of
registers and memory, and prints each instruction next to its side effects.
"""
from __future__ import annotations
from .core import (
    Event, FrameEvent, KeyframeEvent, JumpEvent, StepEvent,
    RegisterWriteEvent, SpecialRegisterWriteEvent,
    MemoryMapEvent, MemoryUnmapEvent, MemoryWriteEvent, MemoryReadEvent,
    SyscallEvent, ExitEvent, EVENT_TYPES,
    RenderConfig,
    TraceError, ArchError, DisasmError, MemSimError, NestingError,
)
from .arch import Arch, X86, X64, Factory
from .mem import MemSim
from .disasm import Disassembler
from .ui import ShadowState, StateUpdater, Renderer, StreamUI, replay
from .utils.logger import log

__version__ = "0.1.0"

__all__ = [
    "Event", "FrameEvent", "KeyframeEvent", "JumpEvent", "StepEvent",
    "RegisterWriteEvent", "SpecialRegisterWriteEvent",
    "MemoryMapEvent", "MemoryUnmapEvent", "MemoryWriteEvent", "MemoryReadEvent",
    "SyscallEvent", "ExitEvent", "EVENT_TYPES",
    "RenderConfig",
    "TraceError", "ArchError", "DisasmError", "MemSimError", "NestingError",
    "Arch", "X86", "X64", "Factory",
    "MemSim", "Disassembler",
    "ShadowState", "StateUpdater", "Renderer", "StreamUI", "replay",
    "log",
]
