"""The code generator interface shared by every target."""

from __future__ import annotations

from hcc.errors import CompileError
from hcc.metadata import ABIMetadata, TypeMetadata

_UINT64 = 1 << 64


def _int64(value: int) -> int:
    """Reinterpret an integer as a signed 64-bit value, as printed by the targets."""
    value %= _UINT64
    return value - _UINT64 if value >= _UINT64 >> 1 else value


class Backend:
    """Base code generator; every emitter does nothing until a target overrides it."""

    comment_marker = ";"

    def __init__(self) -> None:
        self.reg_index = 0
        self.output = ""
        self.abi = ABIMetadata()
        self.codegen_comments = False
        self.types: dict[str, TypeMetadata] = {}

    def _comment(self, text: str, marker: str | None = None) -> None:
        if self.codegen_comments:
            self.output += f"{marker or self.comment_marker} {text}\n"

    def increment_reg_index(self) -> int:
        return 0

    def reset_reg_index(self) -> None:
        self.reg_index = 0

    def emit_function_prologue(self, name: str) -> None:
        pass

    def emit_function_epilogue(self) -> None:
        pass

    def emit_mov_const(self, value: int, reg_name: str = "") -> str:
        return ""

    def emit_add(self, rout: str, rlhs: str, rrhs: str) -> None:
        pass

    def emit_sub(self, rout: str, rlhs: str, rrhs: str) -> None:
        pass

    def emit_mul(self, rout: str, rlhs: str, rrhs: str) -> None:
        pass

    def emit_div(self, rout: str, rlhs: str, rrhs: str) -> None:
        pass

    def emit_move(self, rdest: str, rsrc: str) -> None:
        pass

    def emit_reserve_stack_space(self, size: int) -> None:
        pass

    def emit_load_from_stack(self, align: int, size: int, load_reg: str = "") -> str:
        return ""

    def emit_store_from_stack(self, align: int, size: int, rsrc: str) -> None:
        pass

    def emit_loadaddr_from_stack(self, align: int, load_reg: str = "") -> str:
        return ""

    def emit_call(self, name: str) -> None:
        pass

    def emit_push(self, reg: str) -> None:
        pass

    def emit_pop(self, reg: str) -> None:
        pass

    def emit_single_ret(self) -> None:
        pass

    def emit_label(self, name: str) -> None:
        pass

    def get_type_from_name(self, name: str) -> TypeMetadata:
        """Look up a type by name, raising CompileError if the target lacks it."""
        try:
            return self.types[name]
        except KeyError:
            raise CompileError(f"unknown type {name}") from None