"""Disassembly collaborator."""
from __future__ import annotations
from .disassembler import Disassembler

__all__ = ["Disassembler"]
