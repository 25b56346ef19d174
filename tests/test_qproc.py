import pytest

from hcc.backend.qproc import QprocBackend
from hcc.errors import CompileError
from hcc.metadata import TypeMetadata


@pytest.fixture
def backend():
    return QprocBackend()


def test_function_codegen(backend):
    backend.emit_label("main")
    assert backend.emit_mov_const(0, "r0") == "r0"
    backend.emit_single_ret()
    assert backend.output == "main:\nmovi r0 0\npop ip\n"


def test_prologue_and_epilogue(backend):
    backend.emit_function_prologue("main")
    backend.emit_function_epilogue()
    assert backend.output == "main:\npush bp\nmov bp sp\nmov sp bp\npop bp\npop ip\n"


def test_increment_wraps_after_twelve(backend):
    seen = [backend.increment_reg_index() for _ in range(14)]
    assert seen == list(range(13)) + [0]


def test_mov_const_allocates_registers(backend):
    first = backend.emit_mov_const(1)
    second = backend.emit_mov_const(2)
    assert first != second
    assert backend.output.splitlines() == [f"movi {first} 1", f"movi {second} 2"]


def test_binary_same_output_register(backend):
    backend.emit_add("r3", "r3", "r4")
    assert backend.output.splitlines() == ["add r3 r4"]


def test_binary_different_output_register(backend):
    backend.emit_sub("r5", "r3", "r4")
    assert backend.output.splitlines() == ["sub r3 r4", "mov r5 r3"]


def test_move(backend):
    backend.emit_move("r1", "r2")
    assert backend.output == "mov r1 r2\n"


def test_load_skips_scratch_registers(backend):
    reg = backend.emit_load_from_stack(4, 4)
    assert reg not in ("r0", "r1")
    assert backend.output.endswith(f"lod {reg} dword r0\n")
    assert "sub r0 r1\n" in backend.output


def test_load_byte_also_emits_dword(backend):
    reg = backend.emit_load_from_stack(1, 1, "r5")
    assert reg == "r5"
    lines = backend.output.splitlines()
    assert lines[-2:] == ["lod r5 byte r0", "lod r5 dword r0"]


def test_store_from_r0_goes_through_r1(backend):
    backend.emit_store_from_stack(4, 4, "r0")
    assert backend.output.startswith("push r0\n")
    assert "pop r1\n" in backend.output
    assert backend.output.endswith("str dword r0 r1\n")


def test_store_word(backend):
    backend.emit_store_from_stack(2, 2, "r4")
    assert backend.output.endswith("str word r0 r4\n")
    assert "push" not in backend.output


def test_types_and_abi(backend):
    assert backend.get_type_from_name("long") == TypeMetadata("long", 4)
    assert backend.abi.return_register == "r0"
    assert backend.abi.args_registers[0] == "r2"
    assert backend.abi.args_registers[-1] == "r12"
    assert len(backend.abi.args_registers) == 11


def test_unknown_type(backend):
    with pytest.raises(CompileError) as info:
        backend.get_type_from_name("vec")
    assert str(info.value) == "unknown type vec"


def test_comments(backend):
    backend.codegen_comments = True
    backend.emit_call("f")
    backend.emit_label("f")
    assert backend.output.startswith("; emit_call\n")
    assert "// emit_label\n" in backend.output


def test_loadaddr_uses_fresh_register(backend):
    reg = backend.emit_loadaddr_from_stack(8)
    assert reg.startswith("r")
    assert backend.output.startswith(f"mov {reg} bp\n")
    assert backend.output.endswith(f"sub {reg} r0\n")