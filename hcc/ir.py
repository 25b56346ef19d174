"""The intermediate representation and its translation to target code."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterator

from hcc.errors import CompileError
from hcc.opcodes import IrOpcode, OpType
from hcc.optimizations import constant_propagation, dce_unused, stack_reserve, stack_setup
from hcc.value import Value

if TYPE_CHECKING:
    from hcc.compiler import Compiler

_ARITHMETIC: dict[OpType, Callable[[Value, "Compiler", Value], None]] = {
    OpType.ADD: Value.add,
    OpType.SUB: Value.sub,
    OpType.MUL: Value.mul,
    OpType.DIV: Value.div,
}


def _enabled(compiler: Compiler, member: str) -> bool:
    # Imported here because the compiler module imports this one.
    from hcc.compiler import Optimization

    return compiler.optimizations.has_flag(Optimization[member])


def _pop(values: list[Value]) -> Value:
    try:
        return values.pop()
    except IndexError:
        raise CompileError("value stack is empty") from None


def _variable(compiler: Compiler, name: str) -> Value:
    try:
        return compiler.current_function.variables[name]
    except KeyError:
        raise CompileError(f"undefined variable {name}") from None


class IR:
    """A list of opcodes with a read cursor used during code generation."""

    def __init__(self) -> None:
        self.ops: list[IrOpcode] = []
        self.index = 0
        self.passes_for_each_optimization = 64

    def __iter__(self) -> Iterator[IrOpcode]:
        return iter(self.ops)

    def __len__(self) -> int:
        return len(self.ops)

    def add_line(self) -> None:
        """Append a statement marker."""
        self.ops.append(IrOpcode(OpType.LINE))

    def add_reset(self) -> None:
        """Append a register counter reset."""
        self.ops.append(IrOpcode(OpType.RESET))

    def add(self, op: IrOpcode) -> None:
        """Append an opcode."""
        self.ops.append(op)

    def _next(self) -> IrOpcode:
        if self.index >= len(self.ops):
            return IrOpcode(OpType.END)
        op = self.ops[self.index]
        self.index += 1
        return op

    def _peek(self, count: int = 1) -> IrOpcode:
        saved = self.index
        op = IrOpcode(OpType.NULL)
        for _ in range(count):
            op = self._next()
        self.index = saved
        return op

    def perform_static_optimizations(self, compiler: Compiler) -> None:
        """Terminate the opcode list and run every enabled optimization over it."""
        self.add(IrOpcode(OpType.END))
        if _enabled(compiler, "CONSTANT_PROPAGATION"):
            self.ops = constant_propagation(self.ops)
        if _enabled(compiler, "DCE"):
            self.ops = dce_unused(self.ops, self.passes_for_each_optimization)
        if _enabled(compiler, "FP_OMISSION"):
            self.ops = stack_setup(self.ops)
        if _enabled(compiler, "STACK_RESERVE"):
            self.ops = stack_reserve(self.ops)

    def _return(self, compiler: Compiler, funcdef: IrOpcode) -> None:
        backend = compiler.backend
        if compiler.values:
            value = compiler.values.pop().use(compiler)
            if value.reg_name != backend.abi.return_register:
                backend.emit_move(backend.abi.return_register, value.reg_name)
        if funcdef.need_stack:
            backend.emit_function_epilogue()
        else:
            backend.emit_single_ret()
        compiler.values.clear()

    def compile(self, compiler: Compiler) -> None:
        """Generate target code from the cursor up to END; raise CompileError on failure."""
        backend = compiler.backend
        values = compiler.values
        current_funcdef = IrOpcode(OpType.FUNCDEF)

        while (op := self._next()).type is not OpType.END:
            match op.type:
                case OpType.NULL:
                    raise CompileError("IR_NULL opcode encountered")
                case OpType.FUNCDEF:
                    if self._peek().type is OpType.RET and _enabled(compiler, "FUNCTION_BODY_ELIMINATION"):
                        backend.emit_label(op.name)
                        backend.emit_single_ret()
                        self._next()
                    else:
                        if op.need_stack:
                            backend.reset_reg_index()
                            backend.emit_function_prologue(op.name)
                        else:
                            backend.emit_label(op.name)
                        current_funcdef = op
                case OpType.CREG:
                    values.append(Value.create_as_register(compiler, op.value, op.reg_name))
                case OpType.CCTV:
                    values.append(Value.create_as_compile_time_value(compiler, op.value))
                case OpType.CSV:
                    values.append(Value.create_as_stack_var(compiler, op.md))
                case OpType.RET:
                    self._return(compiler, current_funcdef)
                case OpType.ALLOCA:
                    compiler.current_function.variables[op.name] = Value.create_as_stack_var(
                        compiler, op.md, False
                    )
                case OpType.ADD | OpType.SUB | OpType.MUL | OpType.DIV:
                    rhs = _pop(values)
                    lhs = _pop(values)
                    _ARITHMETIC[op.type](lhs, compiler, rhs)
                    values.append(lhs)
                case OpType.ASSIGN:
                    target = _variable(compiler, op.name)
                    target.set_to(compiler, _pop(values))
                case OpType.ASM:
                    backend.output += op.code + "\n"
                case OpType.VARREF:
                    values.append(_variable(compiler, op.name).load(compiler))
                case OpType.ADDROF:
                    target = _variable(compiler, op.name)
                    values.append(Value(reg_name=backend.emit_loadaddr_from_stack(target.var_stack_align)))
                case OpType.CALL:
                    backend.emit_call(op.name)
                    values.append(Value(reg_name=backend.abi.return_register))
                case OpType.RESET:
                    backend.reset_reg_index()
                case OpType.RESERVE:
                    if op.byte_count > 0:
                        backend.emit_reserve_stack_space(op.byte_count)
                case _:
                    pass

    def results_in_error(self, compiler: Compiler) -> CompileError | None:
        """Compile from the start without keeping output; return the error it raises, if any."""
        self.index = 0
        try:
            self.compile(compiler)
        except CompileError as exc:
            error: CompileError | None = exc
        else:
            error = None
        finally:
            compiler.backend.output = ""
            self.index = 0
        return error