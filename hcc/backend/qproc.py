"""Code generator for the qproc target."""

from __future__ import annotations

from hcc.backend.base import Backend, _int64
from hcc.metadata import TypeMetadata


class QprocBackend(Backend):
    """Emits qproc assembly."""

    comment_marker = ";"

    def __init__(self) -> None:
        super().__init__()
        for name, size in (("void", 0), ("char", 1), ("short", 2), ("int", 4), ("long", 4)):
            self.types[name] = TypeMetadata(name, size)
        self.abi.return_register = "r0"
        self.abi.args_registers = [f"r{i}" for i in range(2, 13)]

    def increment_reg_index(self) -> int:
        result = self.reg_index
        self.reg_index += 1
        if self.reg_index > 12:
            self.reg_index = 0
        return result

    def emit_function_prologue(self, name: str) -> None:
        self._comment("emit_function_prologue")
        self.output += f"{name}:\n"
        self.output += "push bp\nmov bp sp\n"

    def emit_function_epilogue(self) -> None:
        self._comment("emit_function_epilogue")
        self.output += "mov sp bp\npop bp\npop ip\n"

    def emit_mov_const(self, value: int, reg_name: str = "") -> str:
        self._comment("emit_mov_const")
        if not reg_name:
            reg_name = f"r{self.increment_reg_index()}"
        self.output += f"movi {reg_name} {_int64(value)}\n"
        return reg_name

    def _binary(self, mnemonic: str, rout: str, rlhs: str, rrhs: str) -> None:
        self._comment(f"emit_{mnemonic}")
        self.output += f"{mnemonic} {rlhs} {rrhs}\n"
        if rout != rlhs:
            self.output += f"mov {rout} {rlhs}\n"

    def emit_add(self, rout: str, rlhs: str, rrhs: str) -> None:
        self._binary("add", rout, rlhs, rrhs)

    def emit_sub(self, rout: str, rlhs: str, rrhs: str) -> None:
        self._binary("sub", rout, rlhs, rrhs)

    def emit_mul(self, rout: str, rlhs: str, rrhs: str) -> None:
        self._binary("mul", rout, rlhs, rrhs)

    def emit_div(self, rout: str, rlhs: str, rrhs: str) -> None:
        self._binary("div", rout, rlhs, rrhs)

    def emit_move(self, rdest: str, rsrc: str) -> None:
        self._comment("emit_move")
        self.output += f"mov {rdest} {rsrc}\n"

    def emit_reserve_stack_space(self, size: int) -> None:
        self._comment("emit_reserve_stack_space")
        self.output += f"movi r0 {_int64(size)}\nsub sp, r0\n"

    def _address_into_r0(self, align: int) -> None:
        self.output += "mov r0 bp\n"
        self.output += f"movi r1 {_int64(align)}\n"
        self.output += "sub r0 r1\n"

    @staticmethod
    def _width_lines(size: int) -> list[str]:
        # A one-byte access is followed by a dword access as well.
        widths = []
        if size == 1:
            widths.append("byte")
        widths.append("word" if size == 2 else "dword")
        return widths

    def emit_load_from_stack(self, align: int, size: int, load_reg: str = "") -> str:
        self._comment("emit_load_from_stack")
        reg = load_reg
        if not reg:
            reg = f"r{self.increment_reg_index()}"
            while reg in ("r0", "r1"):
                reg = f"r{self.increment_reg_index()}"
        self._address_into_r0(align)
        for width in self._width_lines(size):
            self.output += f"lod {reg} {width} r0\n"
        return reg

    def emit_store_from_stack(self, align: int, size: int, rsrc: str) -> None:
        self._comment("emit_store_from_stack")
        is_used_reg = rsrc in ("r0", "r1")
        if is_used_reg:
            self.output += f"push {rsrc}\n"
        self._address_into_r0(align)
        if rsrc == "r0":
            self.output += "  "
            rsrc = "r1"
        if is_used_reg:
            self.output += f"pop {rsrc}\n"
        for width in self._width_lines(size):
            self.output += f"str {width} r0 {rsrc}\n"

    def emit_loadaddr_from_stack(self, align: int, load_reg: str = "") -> str:
        self._comment("emit_loadaddr_from_stack")
        reg = load_reg
        if not reg:
            reg = str(self.increment_reg_index())
        if reg == "r0":
            reg = str(self.increment_reg_index())
        reg = "r" + reg
        self.output += f"mov {reg} bp\n"
        self.output += f"movi r0 {_int64(align)}\n"
        self.output += f"sub {reg} r0\n"
        return reg

    def emit_call(self, name: str) -> None:
        self._comment("emit_call")
        self.output += f"call {name}\n"

    def emit_push(self, reg: str) -> None:
        self._comment("emit_push")
        self.output += f"push {reg}\n"

    def emit_pop(self, reg: str) -> None:
        self._comment("emit_pop")
        self.output += f"pop {reg}\n"

    def emit_single_ret(self) -> None:
        self._comment("emit_single_ret", "//")
        self.output += "pop ip\n"

    def emit_label(self, name: str) -> None:
        self._comment("emit_label", "//")
        self.output += f"{name}:\n"