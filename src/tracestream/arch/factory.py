"""Factory for architecture metadata lookup by name."""
from __future__ import annotations
from typing import Union
from ..core.exceptions import ArchError
from .base import Arch
from .x86 import X86
from .x64 import X64


class Factory:
    """Resolves architecture names (as found in trace headers) to metadata."""

    ALIASES = {
        "x86": X86,
        "i386": X86,
        "x86_32": X86,
        "x64": X64,
        "x86_64": X64,
        "amd64": X64,
    }

    @staticmethod
    def create(arch: Union[str, Arch]) -> Arch:
        """Create architecture metadata.

        Args:
            arch: Architecture name, or an Arch instance passed through as-is

        Returns:
            Arch instance

        Raises:
            ArchError: If the name is not recognized
        """
        if isinstance(arch, Arch):
            return arch
        cls = Factory.ALIASES.get(str(arch).strip().lower())
        if cls is None:
            raise ArchError(str(arch))
        return cls()
