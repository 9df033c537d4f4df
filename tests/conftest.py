"""
Pytest configuration and fixtures for tracestream tests.
"""
from __future__ import annotations
import io
import pytest

from tracestream import StreamUI, DisasmError, log


class FakeDisasm:
    """Deterministic stand-in for the capstone disassembler.

    Renders bytes as ``0x<addr>: ins <hex>``; all-0xFF input fails.
    """

    def __init__(self) -> None:
        self.calls = []

    def disas(self, data, addr, arch):
        data = bytes(data)
        self.calls.append((data, addr))
        if data and all(b == 0xFF for b in data):
            raise DisasmError(addr, data)
        return f"0x{addr:x}: ins {data.hex()}"


@pytest.fixture(autouse=True)
def quiet_log():
    log.set_verbose(False)
    yield
    log.set_verbose(False)


@pytest.fixture
def fake_disasm() -> FakeDisasm:
    return FakeDisasm()


@pytest.fixture
def out() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def ui(out, fake_disasm) -> StreamUI:
    return StreamUI(out, arch="x64", disasm=fake_disasm)
