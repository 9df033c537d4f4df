"""Common type aliases for tracestream.

Provides consistent type hints across the codebase.
"""
from __future__ import annotations
from typing import Any, Dict, List, Protocol, Tuple, Union

# Memory addresses and sizes
Addr = int  # Memory address
Size = int  # Size in bytes
Prot = int  # Memory protection flags (unicorn UC_PROT_*)

# Register types
RegName = str  # Register name like 'rax', 'eax'
RegValue = int  # Register value
RegID = int  # Unicorn register ID

# Binary data
Bytes = bytes
Data = Union[bytes, bytearray]

# Collections
RegMap = Dict[RegID, RegValue]  # id -> value
SpRegMap = Dict[RegID, bytes]  # id -> raw payload
Region = Tuple[Addr, Addr, Prot]  # (start, end, prot), end exclusive
RegionList = List[Region]


class Writer(Protocol):
    """Output sink: anything with a text write() method."""

    def write(self, s: str) -> Any:
        ...


__all__ = [
    "Addr", "Size", "Prot",
    "RegName", "RegValue", "RegID",
    "Bytes", "Data",
    "RegMap", "SpRegMap", "Region", "RegionList",
    "Writer",
]
