"""Base class for architecture metadata."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, Optional

from ..types import RegID, RegName


class Arch(ABC):
    """Architecture metadata consumed by the replay session.

    Supplies register naming, the stack pointer id, address width, and the
    engine selectors for the memory simulation (unicorn) and the
    disassembler (capstone).
    """

    name: str = ""
    bits: int = 0
    uc_arch: int = 0
    uc_mode: int = 0
    cs_arch: int = 0
    cs_mode: int = 0

    def __init__(self) -> None:
        self._names: Optional[Dict[RegID, RegName]] = None

    @property
    @abstractmethod
    def sp(self) -> RegID:
        """Stack pointer register id."""
        ...

    @property
    @abstractmethod
    def ip(self) -> RegID:
        """Program counter register id."""
        ...

    @abstractmethod
    def regs(self) -> Dict[RegName, RegID]:
        """Register name -> unicorn id table."""
        ...

    def reg_names(self) -> Dict[RegID, RegName]:
        """Register id -> name table, built once.

        When two names share an id the first listed one wins.
        """
        if self._names is None:
            names: Dict[RegID, RegName] = {}
            for reg, num in self.regs().items():
                names.setdefault(num, reg)
            self._names = names
        return self._names

    def reg_name(self, num: RegID) -> Optional[RegName]:
        """Resolve a register id, None if the table has no entry."""
        return self.reg_names().get(num)

    @property
    def longest(self) -> int:
        """Length of the longest register name."""
        return max((len(n) for n in self.reg_names().values()), default=0)

    @property
    def ptr_size(self) -> int:
        """Pointer size in bytes."""
        return self.bits // 8

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name} bits={self.bits}>"
