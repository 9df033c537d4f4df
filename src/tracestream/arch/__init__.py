"""Architecture metadata providers.

Register naming, stack pointer id and address width for x86/x64.
"""
from __future__ import annotations
from .base import Arch
from .x86 import X86
from .x64 import X64
from .factory import Factory

__all__ = ["Arch", "X86", "X64", "Factory"]
