"""Shadow memory simulation backed by an unexecuted Unicorn instance."""
from __future__ import annotations
from typing import Dict, Iterator, Tuple, TYPE_CHECKING
from unicorn import Uc, UcError
from ..core.exceptions import MemSimError
from ..types import Addr, Data, Prot, RegionList, Size
from ..utils.logger import log
from ..utils.constants import PAGE, UC_PROT_ALL, align_down, align_up, prot_str

if TYPE_CHECKING:
    from ..arch.base import Arch


class MemSim:
    """Sparse memory simulation with automatic page alignment.

    Mirrors the emulated address space from trace events. Unicorn stores the
    bytes; the CPU is never started. Page bookkeeping is kept here so reads
    and writes can span unmapped holes: unmapped bytes read as zero and
    writes to them are dropped.
    """

    def __init__(self, arch: "Arch"):
        self.uc = Uc(arch.uc_arch, arch.uc_mode)
        self._pages: Dict[int, int] = {}  # page -> prot

    @staticmethod
    def page_count(size: int) -> int:
        """Calculate number of pages needed for size."""
        return (size + PAGE - 1) // PAGE

    @staticmethod
    def _check(addr: Addr, size: Size) -> None:
        if addr < 0 or size < 0:
            raise MemSimError(f"Invalid range: addr={addr:#x} size={size:#x}")

    def is_mapped(self, addr: Addr) -> bool:
        """Return True if the page containing addr is currently mapped."""
        return align_down(addr) in self._pages

    def _chunks(self, addr: Addr, size: Size) -> Iterator[Tuple[int, int, int]]:
        """Split [addr, addr+size) at page boundaries.

        Yields (address, offset into the request, length) per page.
        """
        off = 0
        while off < size:
            cur = addr + off
            n = min(size - off, align_down(cur) + PAGE - cur)
            yield cur, off, n
            off += n

    def map(self, addr: Addr, size: Size, prot: Prot = UC_PROT_ALL, zero: bool = False) -> None:
        """Map memory region with automatic page alignment.

        Pages already mapped keep their contents unless zero is set, and take
        the new protection.
        """
        self._check(addr, size)
        start = align_down(addr)
        end = align_up(addr + size)
        sz = max(PAGE, end - start)

        pages = list(range(start, start + sz, PAGE))
        unmapped = [p for p in pages if p not in self._pages]

        try:
            if len(unmapped) == len(pages):
                # All unmapped - bulk map, fresh pages are zeroed by Unicorn
                self.uc.mem_map(start, sz, prot)
                for p in pages:
                    self._pages[p] = prot
                log.debug(f"MemSim.map: 0x{start:08X}-0x{start+sz:08X} ({len(pages)} pages, {prot_str(prot)})")
                return

            updated = 0
            for page in pages:
                if page not in self._pages:
                    self.uc.mem_map(page, PAGE, prot)
                    self._pages[page] = prot
                elif self._pages[page] != prot:
                    self.uc.mem_protect(page, PAGE, prot)
                    self._pages[page] = prot
                    updated += 1
            if zero and size:
                self.write(addr, bytes(size))
            log.debug(
                f"MemSim.map: 0x{start:08X}-0x{start+sz:08X} "
                f"({len(unmapped)} new, {updated} reprotected, {prot_str(prot)})"
            )
        except UcError as e:
            log.warning(f"MemSim.map: failed at 0x{start:08X}+0x{sz:X}: {e}")

    def unmap(self, addr: Addr, size: Size) -> None:
        """Unmap memory region; pages that are not mapped are ignored."""
        self._check(addr, size)
        start = align_down(addr)
        end = align_up(addr + size)
        sz = max(PAGE, end - start)

        dropped = 0
        for page in range(start, start + sz, PAGE):
            if page in self._pages:
                try:
                    self.uc.mem_unmap(page, PAGE)
                except UcError as e:
                    log.warning(f"MemSim.unmap: failed at 0x{page:08X}: {e}")
                    continue
                del self._pages[page]
                dropped += 1
        log.debug(f"MemSim.unmap: 0x{start:08X}-0x{start+sz:08X} ({dropped} pages)")

    def write(self, addr: Addr, data: Data) -> None:
        """Write bytes to memory, dropping bytes that land on unmapped pages."""
        self._check(addr, len(data))
        data = bytes(data)
        for cur, off, n in self._chunks(addr, len(data)):
            if align_down(cur) not in self._pages:
                log.debug(f"MemSim.write: dropped {n} bytes at unmapped 0x{cur:08X}")
                continue
            self.uc.mem_write(cur, data[off:off + n])

    def read(self, addr: Addr, buf: bytearray) -> bytearray:
        """Fill buf with memory contents at addr; unmapped bytes read as zero.

        Returns:
            buf, for convenience
        """
        self._check(addr, len(buf))
        for cur, off, n in self._chunks(addr, len(buf)):
            if align_down(cur) in self._pages:
                buf[off:off + n] = self.uc.mem_read(cur, n)
            else:
                buf[off:off + n] = bytes(n)
        return buf

    def regions(self) -> RegionList:
        """Mapped regions as sorted, coalesced (start, end, prot) tuples."""
        out: RegionList = []
        for page in sorted(self._pages):
            prot = self._pages[page]
            if out and out[-1][1] == page and out[-1][2] == prot:
                out[-1] = (out[-1][0], page + PAGE, prot)
            else:
                out.append((page, page + PAGE, prot))
        return out
