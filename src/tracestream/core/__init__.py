"""Core replay types.

Event variants, session configuration, and the exception hierarchy.
"""
from __future__ import annotations
from .events import (
    Event, FrameEvent, KeyframeEvent, JumpEvent, StepEvent,
    RegisterWriteEvent, SpecialRegisterWriteEvent,
    MemoryMapEvent, MemoryUnmapEvent, MemoryWriteEvent, MemoryReadEvent,
    SyscallEvent, ExitEvent, EVENT_TYPES, BOUNDARY_TYPES,
)
from .config import RenderConfig
from .exceptions import (
    TraceError, ArchError, DisasmError, MemSimError, NestingError
)

__all__ = [
    "Event", "FrameEvent", "KeyframeEvent", "JumpEvent", "StepEvent",
    "RegisterWriteEvent", "SpecialRegisterWriteEvent",
    "MemoryMapEvent", "MemoryUnmapEvent", "MemoryWriteEvent", "MemoryReadEvent",
    "SyscallEvent", "ExitEvent", "EVENT_TYPES", "BOUNDARY_TYPES",
    "RenderConfig",
    "TraceError", "ArchError", "DisasmError", "MemSimError", "NestingError",
]
