"""Trace event variants.

An emulator trace is a flat or framed sequence of these records. Each variant
is a frozen dataclass; ``EVENT_TYPES`` lists the closed set so dispatch tables
elsewhere can be checked for exhaustiveness.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple

from ..types import Addr, Size, Prot, RegID, RegValue


class Event:
    """Marker base class for every trace event."""
    __slots__ = ()


def _freeze(obj: Event, **values) -> None:
    """Store normalized payloads on a frozen instance."""
    for name, value in values.items():
        object.__setattr__(obj, name, value)


@dataclass(frozen=True)
class FrameEvent(Event):
    """A batch of events delivered together, flattened in order."""
    ops: Tuple[Event, ...] = ()

    def __post_init__(self):
        _freeze(self, ops=tuple(self.ops))


@dataclass(frozen=True)
class KeyframeEvent(Event):
    """A state snapshot batch: applied to shadow state, never rendered."""
    ops: Tuple[Event, ...] = ()

    def __post_init__(self):
        _freeze(self, ops=tuple(self.ops))


@dataclass(frozen=True)
class JumpEvent(Event):
    """Entry into a new basic block."""
    addr: Addr


@dataclass(frozen=True)
class StepEvent(Event):
    """Completion of one instruction of ``size`` bytes."""
    size: Size


@dataclass(frozen=True)
class RegisterWriteEvent(Event):
    """A general register was set."""
    num: RegID
    val: RegValue


@dataclass(frozen=True)
class SpecialRegisterWriteEvent(Event):
    """A non-general register (vector, flags, ...) was set."""
    num: RegID
    val: bytes

    def __post_init__(self):
        _freeze(self, val=bytes(self.val))


@dataclass(frozen=True)
class MemoryMapEvent(Event):
    """A memory region became valid."""
    addr: Addr
    size: Size
    prot: Prot
    zero: bool = False


@dataclass(frozen=True)
class MemoryUnmapEvent(Event):
    """A memory region became invalid."""
    addr: Addr
    size: Size


@dataclass(frozen=True)
class MemoryWriteEvent(Event):
    """Bytes written to emulated memory."""
    addr: Addr
    data: bytes

    def __post_init__(self):
        _freeze(self, data=bytes(self.data))


@dataclass(frozen=True)
class MemoryReadEvent(Event):
    """Bytes read from emulated memory. Informational only."""
    addr: Addr
    data: bytes

    def __post_init__(self):
        _freeze(self, data=bytes(self.data))


@dataclass(frozen=True)
class SyscallEvent(Event):
    """A syscall; ``ops`` holds its observable side effects."""
    num: int
    args: Tuple[int, ...] = ()
    ret: int = 0
    ops: Tuple[Event, ...] = field(default=())

    def __post_init__(self):
        _freeze(self, args=tuple(self.args), ops=tuple(self.ops))


@dataclass(frozen=True)
class ExitEvent(Event):
    """Execution terminated."""


# Closed set of concrete variants
EVENT_TYPES = (
    FrameEvent, KeyframeEvent,
    JumpEvent, StepEvent,
    RegisterWriteEvent, SpecialRegisterWriteEvent,
    MemoryMapEvent, MemoryUnmapEvent, MemoryWriteEvent, MemoryReadEvent,
    SyscallEvent, ExitEvent,
)

# Events that end the pending instruction
BOUNDARY_TYPES = (JumpEvent, StepEvent, SyscallEvent)
