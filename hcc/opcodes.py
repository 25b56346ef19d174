"""Opcodes of the intermediate representation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from hcc.metadata import TypeMetadata


class OpType(Enum):
    """Kinds of IR opcodes."""

    NULL = auto()
    END = auto()
    FUNCDEF = auto()
    CREG = auto()  # create a register value
    CCTV = auto()  # create a compile-time value
    CSV = auto()  # create a stack value
    RET = auto()
    ALLOCA = auto()
    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()
    ASSIGN = auto()
    ASM = auto()
    VARREF = auto()
    ADDROF = auto()
    CALL = auto()
    LINE = auto()  # statement marker used by the static optimizations
    RESET = auto()  # resets the register counter
    RESERVE = auto()


@dataclass
class IrOpcode:
    """One IR instruction; only the fields relevant to its type are meaningful.

    ``name`` is the function, variable or callee name; ``value`` the constant of
    CREG and CCTV; ``md`` the type of CSV and ALLOCA; ``code`` the text of ASM;
    ``byte_count`` the amount of stack space of RESERVE.
    """

    type: OpType = OpType.NULL
    name: str = ""
    arg_types: list[TypeMetadata] = field(default_factory=list)
    arg_names: list[str] = field(default_factory=list)
    need_stack: bool = False
    value: int = 0
    reg_name: str = ""
    md: TypeMetadata | None = None
    code: str = ""
    byte_count: int = 0


_STACK_OPS = frozenset({OpType.ALLOCA, OpType.CSV})


def opcode_affects_stack(op: IrOpcode) -> bool:
    """Return whether the opcode places something on the function's stack."""
    return op.type in _STACK_OPS