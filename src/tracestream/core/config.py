"""Per-session rendering parameters."""
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING
from ..utils.constants import INS_COL, REG_PAD, MAX_DEPTH

if TYPE_CHECKING:
    from ..arch.base import Arch


@dataclass(frozen=True)
class RenderConfig:
    """Column layout and limits, computed once from architecture metadata.

    Attributes:
        inscol: Width the disassembly column is padded to
        name_width: Register names are right-aligned to this width
        value_width: Hex digits shown after the 0x prefix
        regcol: Width the first register column is padded to
        max_depth: Deepest Frame/Keyframe/Syscall nesting that is followed
    """
    inscol: int = INS_COL
    name_width: int = 0
    value_width: int = 16
    regcol: int = REG_PAD + 16
    max_depth: int = MAX_DEPTH

    @classmethod
    def for_arch(cls, arch: "Arch", **overrides) -> "RenderConfig":
        """Build the layout for an architecture; keyword overrides win."""
        longest = arch.longest
        digits = arch.bits // 4
        cfg = cls(
            name_width=longest,
            value_width=digits,
            regcol=longest + REG_PAD + digits,
        )
        return replace(cfg, **overrides) if overrides else cfg

    def reg(self, name: str, val: int) -> str:
        """Format one register change, e.g. '    rax = 0x0000000000000001'."""
        return f"{name:>{self.name_width}} = 0x{val:0{self.value_width}x}"
