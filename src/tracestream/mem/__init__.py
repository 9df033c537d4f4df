"""Shadow memory simulation."""
from __future__ import annotations
from .memory import MemSim

__all__ = ["MemSim"]
