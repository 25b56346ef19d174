"""Static optimizations over a list of IR opcodes."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable

from hcc.errors import CompileError
from hcc.opcodes import IrOpcode, OpType, opcode_affects_stack

_ARITHMETIC = frozenset({OpType.ADD, OpType.SUB, OpType.MUL, OpType.DIV})


@dataclass
class _VarInfo:
    alloca_idx: int
    optimizable: bool = True
    definition: list[IrOpcode] = field(default_factory=list)
    last_assign_idx: int | None = None
    def_start_idx: int | None = None
    num_assignments: int = 0
    address_taken: bool = False


def _trace_constant_definition(ops: list[IrOpcode], assign_idx: int) -> int | None:
    """Return where a constant expression feeding the assignment starts, if it is one."""
    needed = 1
    for j in range(assign_idx - 1, -1, -1):
        op_type = ops[j].type
        if op_type is OpType.CCTV:
            needed -= 1
        elif op_type in _ARITHMETIC:
            needed += 1
        else:
            return None
        if needed == 0:
            return j
    return None


def constant_propagation(ops: Iterable[IrOpcode]) -> list[IrOpcode]:
    """Replace variables assigned once from a constant expression by that expression."""
    ops = list(ops)
    info: dict[str, _VarInfo] = {}

    for i, op in enumerate(ops):
        if op.type is OpType.ALLOCA:
            info[op.name] = _VarInfo(alloca_idx=i)
        elif op.type is OpType.ASSIGN and op.name in info:
            var = info[op.name]
            var.num_assignments += 1
            var.last_assign_idx = i
            if not var.optimizable or var.num_assignments > 1:
                var.optimizable = False
                var.definition = []
                continue
            start = _trace_constant_definition(ops, i)
            if start is None:
                var.optimizable = False
                var.definition = []
            else:
                var.definition = ops[start:i]
                var.def_start_idx = start
        elif op.type is OpType.ADDROF and op.name in info:
            info[op.name].address_taken = True
            info[op.name].optimizable = False

    for var in info.values():
        var.optimizable = (
            var.optimizable
            and not var.address_taken
            and var.num_assignments == 1
            and bool(var.definition)
            and var.last_assign_idx is not None
            and var.def_start_idx is not None
        )

    deleted: set[int] = set()
    for var in info.values():
        if var.optimizable:
            deleted.add(var.alloca_idx)
            deleted.add(var.last_assign_idx)
            deleted.update(range(var.def_start_idx, var.last_assign_idx))

    result: list[IrOpcode] = []
    for i, op in enumerate(ops):
        if i in deleted:
            continue
        var = info.get(op.name) if op.type is OpType.VARREF else None
        if var is not None and var.optimizable:
            result.extend(replace(def_op) for def_op in var.definition)
        else:
            result.append(op)
    return result


def _find_unused_variable(ops: list[IrOpcode], used: set[str]) -> set[int] | None:
    """Return the indices to drop for the first unused variable, or None."""
    var = ""
    doomed: set[int] = set()
    for i, op in enumerate(ops):
        if op.type is OpType.ALLOCA and not var:
            if op.name not in used:
                var = op.name
                doomed.add(i)
        elif op.type is OpType.VARREF and op.name == var:
            used.add(var)
            return None
        elif op.type is OpType.ASSIGN and op.name == var:
            # An assignment to an unused variable goes back to its statement marker.
            for j in range(i, -1, -1):
                doomed.add(j)
                if ops[j].type is OpType.LINE:
                    break
    return doomed if var else None


def dce_unused(ops: Iterable[IrOpcode], passes: int = 64) -> list[IrOpcode]:
    """Remove variables that are never read, along with their assignments.

    Only passes that remove nothing count towards ``passes``.
    """
    ops = list(ops)
    used: set[str] = set()
    remaining = passes
    while remaining > 0:
        doomed = _find_unused_variable(ops, used)
        if doomed is None:
            remaining -= 1
            continue
        ops = [op for i, op in enumerate(ops) if i not in doomed]
    return ops


def stack_setup(ops: Iterable[IrOpcode]) -> list[IrOpcode]:
    """Mark every function that uses the stack as needing a frame."""
    result: list[IrOpcode] = []
    current: IrOpcode | None = None
    for op in ops:
        if op.type is OpType.FUNCDEF:
            current = replace(op)
            result.append(current)
            continue
        if opcode_affects_stack(op):
            if current is None:
                raise CompileError("stack operation outside of a function")
            current.need_stack = True
        result.append(op)
    return result


def stack_reserve(ops: Iterable[IrOpcode]) -> list[IrOpcode]:
    """Insert one stack reservation after each function header, sized for its variables.

    A function is closed by the next function header or by END.
    """
    result = list(ops)
    insert_at = 0
    size = 0
    inserts: list[tuple[int, int]] = []

    for i, op in enumerate(result):
        if op.type is OpType.FUNCDEF and insert_at == 0:
            insert_at = i + 1
            size = 0
        elif op.type in (OpType.FUNCDEF, OpType.END) and insert_at > 0:
            inserts.append((insert_at, size))
            insert_at = i + 1
            size = 0
            if op.type is OpType.END:
                break
        elif op.type is OpType.ALLOCA and i != 0:
            size += op.md.size

    for position, byte_count in reversed(inserts):
        result.insert(position, IrOpcode(OpType.RESERVE, byte_count=byte_count))
    return result