from __future__ import annotations

import io

from unicorn.x86_const import UC_X86_REG_RAX, UC_X86_REG_RBX

from tracestream import (
    StreamUI, FrameEvent, KeyframeEvent, JumpEvent, StepEvent,
    RegisterWriteEvent, SpecialRegisterWriteEvent, MemoryMapEvent,
    MemoryWriteEvent, MemoryReadEvent, SyscallEvent, ExitEvent, replay,
)
from tracestream.utils.constants import UC_PROT_ALL


def _ins(ui: StreamUI, text: str, reg: str = "", mem: str = "") -> str:
    """Expected primary instruction line."""
    cfg = ui.config
    line = f"{text:<{cfg.inscol}} | {reg:<{cfg.regcol}}"
    if mem:
        line += f" | {mem}"
    return line + "\n"


def _rax(ui: StreamUI, val: int) -> str:
    return ui.config.reg("rax", val)


def _seed(ui: StreamUI, addr: int, code: bytes) -> None:
    ui.feed(KeyframeEvent((
        MemoryMapEvent(addr, 0x1000, UC_PROT_ALL),
        MemoryWriteEvent(addr, code),
        JumpEvent(addr),
    )))


def test_step_is_rendered_on_next_step(ui, out) -> None:
    _seed(ui, 0x1000, bytes.fromhex("4883c001" "4883c002"))
    ui.feed(StepEvent(4))
    ui.feed(RegisterWriteEvent(UC_X86_REG_RAX, 1))
    assert out.getvalue() == ""

    ui.feed(StepEvent(4))
    assert out.getvalue() == _ins(ui, "0x1000: ins 4883c001", _rax(ui, 1))

    ui.flush()
    assert out.getvalue().splitlines(keepends=True)[1] == _ins(ui, "0x1004: ins 4883c002")
    assert ui.pc == 0x1008
    assert ui.regs[UC_X86_REG_RAX] == 1


def test_flush_without_pending_is_a_no_op(ui, out) -> None:
    _seed(ui, 0x1000, b"\x90")
    ui.feed(StepEvent(1))
    ui.flush()
    first = out.getvalue()
    assert first
    ui.flush()
    assert out.getvalue() == first
    assert ui.pc == 0x1001


def test_jump_flushes_then_prints_block_header(ui, out) -> None:
    _seed(ui, 0x1000, b"\x90")
    ui.feed(StepEvent(1))
    ui.feed(JumpEvent(0x3000))
    assert out.getvalue() == _ins(ui, "0x1000: ins 90") + "\n0x3000\n"
    assert ui.pc == 0x3000
    assert ui.pending is None


def test_keyframe_memory_is_visible_and_silent(ui, out) -> None:
    ui.feed(KeyframeEvent((
        MemoryMapEvent(0x2000, 0x1000, UC_PROT_ALL),
        MemoryWriteEvent(0x2000, b"\xaa"),
        JumpEvent(0x2000),
    )))
    assert out.getvalue() == ""
    ui.feed(StepEvent(1))
    ui.flush()
    assert out.getvalue() == _ins(ui, "0x2000: ins aa")


def test_keyframe_flushes_against_old_state(ui, out, fake_disasm) -> None:
    _seed(ui, 0x1000, b"\x90")
    ui.feed(StepEvent(1))
    ui.feed(KeyframeEvent((MemoryWriteEvent(0x1000, b"\xcc"),)))
    assert fake_disasm.calls == [(b"\x90", 0x1000)]
    assert out.getvalue() == _ins(ui, "0x1000: ins 90")


def test_instruction_bytes_are_read_before_its_own_writes(ui, out, fake_disasm) -> None:
    _seed(ui, 0x1000, b"\x90\x90")
    ui.feed(StepEvent(2))
    ui.feed(MemoryWriteEvent(0x1000, b"\xcc\xcc"))
    ui.flush()
    assert fake_disasm.calls == [(b"\x90\x90", 0x1000)]
    assert out.getvalue() == _ins(ui, "0x1000: ins 9090", mem="W 1000")
    assert bytes(ui.mem.read(0x1000, bytearray(2))) == b"\xcc\xcc"


def test_syscall_renders_once_and_applies_nested_events(ui, out) -> None:
    _seed(ui, 0x2000, b"\xaa")
    ui.feed(StepEvent(1))
    ui.feed(SyscallEvent(1, (1, 0x2000), 3, (MemoryWriteEvent(0x2000, b"\xbb"),)))
    ui.feed(JumpEvent(0x2000))
    ui.feed(StepEvent(1))
    ui.flush()

    assert out.getvalue() == (
        _ins(ui, "0x2000: ins aa")
        + "syscall(1, [0x1, 0x2000]) = 3\n"
        + "\n0x2000\n"
        + _ins(ui, "0x2000: ins bb")
    )
    assert "W 2000" not in out.getvalue()


def test_frames_are_flattened_in_order(ui, out) -> None:
    _seed(ui, 0x1000, b"\x90\x90")
    ui.feed(FrameEvent((
        StepEvent(1),
        FrameEvent((RegisterWriteEvent(UC_X86_REG_RAX, 2),)),
        StepEvent(1),
    )))
    ui.flush()
    assert out.getvalue() == _ins(ui, "0x1000: ins 90", _rax(ui, 2)) + _ins(ui, "0x1001: ins 90")


def test_side_effects_without_pending_are_applied_unrendered(ui, out) -> None:
    ui.feed(JumpEvent(0x1000))
    ui.feed(RegisterWriteEvent(UC_X86_REG_RBX, 5))
    ui.feed(MemoryMapEvent(0x1000, 0x1000, UC_PROT_ALL))
    ui.feed(MemoryWriteEvent(0x1000, b"\x90"))
    ui.feed(JumpEvent(0x1000))
    ui.feed(StepEvent(1))
    ui.flush()
    assert ui.regs[UC_X86_REG_RBX] == 5
    assert out.getvalue() == "\n0x1000\n\n0x1000\n" + _ins(ui, "0x1000: ins 90")


def test_exit_event_is_silent(ui, out) -> None:
    _seed(ui, 0x1000, b"\x90")
    ui.feed(StepEvent(1))
    ui.feed(ExitEvent())
    ui.flush()
    assert out.getvalue() == _ins(ui, "0x1000: ins 90")


def test_special_register_prints_placeholder(ui, out) -> None:
    _seed(ui, 0x1000, b"\x90")
    ui.feed(StepEvent(1))
    ui.feed(SpecialRegisterWriteEvent(300, b"\x00" * 16))
    ui.flush()
    assert out.getvalue() == "<unimplemented special register>\n" + _ins(ui, "0x1000: ins 90")
    assert ui.spregs[300] == b"\x00" * 16


def test_read_event_is_listed_but_does_not_mutate(ui, out) -> None:
    _seed(ui, 0x1000, b"\x90")
    ui.feed(StepEvent(1))
    ui.feed(MemoryReadEvent(0x1000, b"\x55"))
    ui.flush()
    assert out.getvalue() == _ins(ui, "0x1000: ins 90", mem="R 1000")
    assert bytes(ui.mem.read(0x1000, bytearray(1))) == b"\x90"


def test_over_deep_nesting_is_dropped(ui, out, capsys) -> None:
    ev = StepEvent(1)
    for _ in range(ui.config.max_depth + 5):
        ev = FrameEvent((ev,))
    ui.feed(ev)
    ui.flush()
    assert out.getvalue() == ""
    assert ui.pending is None
    assert "[WARN]" in capsys.readouterr().err


def test_context_manager_flushes_on_exit(out, fake_disasm) -> None:
    with StreamUI(out, disasm=fake_disasm) as ui:
        ui.feed(JumpEvent(0x10))
        ui.feed(StepEvent(2))
    assert out.getvalue() == "\n0x10\n" + _ins(ui, "0x10: ins 0000")


def test_replay_returns_session(fake_disasm) -> None:
    out = io.StringIO()
    ui = replay([JumpEvent(0x10), StepEvent(2), StepEvent(2)], out, "x86", disasm=fake_disasm)
    assert ui.pc == 0x14
    assert ui.arch.name == "x86"
    assert out.getvalue().count("ins 0000") == 2
