"""Custom exception classes for tracestream."""
from __future__ import annotations


class TraceError(Exception):
    """Base class for all replay exceptions."""
    pass


class ArchError(TraceError):
    """Raised when an architecture name is unknown."""
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unsupported architecture: {name!r}")


class DisasmError(TraceError):
    """Raised when bytes cannot be disassembled."""
    def __init__(self, address: int, data: bytes, reason: str = "no instruction decoded"):
        self.address = address
        self.data = bytes(data)
        super().__init__(f"Failed to disassemble {self.data.hex()} at 0x{address:x}: {reason}")


class MemSimError(TraceError):
    """Raised when a memory simulation request is malformed."""
    pass


class NestingError(TraceError):
    """Raised when event batches nest deeper than the configured limit."""
    def __init__(self, depth: int):
        self.depth = depth
        super().__init__(f"Event nesting exceeds depth limit: {depth}")
