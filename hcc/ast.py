"""Syntax tree nodes and their lowering to IR."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator

from hcc.compiler import Optimization
from hcc.errors import CompileError
from hcc.opcodes import IrOpcode, OpType

if TYPE_CHECKING:
    from hcc.compiler import Compiler

_Line = tuple[int, str]

_BINARY_OPS = {"add": OpType.ADD, "sub": OpType.SUB, "mul": OpType.MUL, "div": OpType.DIV}


@dataclass
class AstNode(ABC):
    """A node of the syntax tree."""

    children: list[AstNode] = field(default_factory=list, kw_only=True)

    @abstractmethod
    def _lines(self, indent: int) -> Iterator[_Line]:
        """Yield (depth, text) pairs describing the node."""

    def _child_lines(self, indent: int) -> Iterator[_Line]:
        for child in self.children:
            yield from child._lines(indent)

    def format(self, indent: int = 0) -> str:
        """Return an indented, human-readable dump of the tree."""
        return "".join(f"{'  ' * depth}{text}\n" for depth, text in self._lines(indent))

    def print(self, indent: int = 0) -> None:
        """Write the dump of the tree to standard output."""
        sys.stdout.write(self.format(indent))

    def compile(self, compiler: Compiler) -> None:
        """Lower the node's children into the compiler's IR, in order."""
        for child in self.children:
            child.compile(compiler)


@dataclass
class AstRootNode(AstNode):
    """The top of a translation unit."""

    def _lines(self, indent: int) -> Iterator[_Line]:
        yield indent, "AstRootNode"
        yield from self._child_lines(indent + 1)


@dataclass
class AstFuncDef(AstNode):
    """A function definition; its statements are its children."""

    name: str
    args: dict[str, str] = field(default_factory=dict)

    def _lines(self, indent: int) -> Iterator[_Line]:
        yield indent, "AstFuncDef"
        yield indent + 1, "args:"
        for arg_name, arg_type in sorted(self.args.items()):
            yield indent + 2, f"{arg_name}: {arg_type}"
        yield indent + 1, f"name: {self.name}"
        yield from self._child_lines(indent + 1)

    def compile(self, compiler: Compiler) -> None:
        op = IrOpcode(OpType.FUNCDEF, name=self.name)
        for arg_name, arg_type in sorted(self.args.items()):
            op.arg_names.append(arg_name)
            op.arg_types.append(compiler.backend.get_type_from_name(arg_type))
        compiler.ir.add(op)
        super().compile(compiler)


@dataclass
class AstVarDeclare(AstNode):
    """Declaration of one or more variables of a type."""

    names: list[str]
    type_name: str

    def _lines(self, indent: int) -> Iterator[_Line]:
        yield indent, "AstVarDeclare"
        yield indent + 1, "names: " + "".join(f"{name} " for name in self.names)
        yield indent + 1, f"type: {self.type_name}"

    def compile(self, compiler: Compiler) -> None:
        var_type = compiler.backend.get_type_from_name(self.type_name)
        for name in self.names:
            compiler.ir.add(IrOpcode(OpType.ALLOCA, name=name, md=var_type))


@dataclass
class AstVarAssign(AstNode):
    """Assignment of an expression to a variable."""

    name: str
    expr: AstNode

    def _lines(self, indent: int) -> Iterator[_Line]:
        yield indent, "AstVarAssign"
        yield indent + 1, f"name: {self.name}"
        yield indent + 1, "expr:"
        yield from self.expr._lines(indent + 2)

    def compile(self, compiler: Compiler) -> None:
        compiler.ir.add_reset()
        compiler.ir.add_line()
        self.expr.compile(compiler)
        compiler.ir.add(IrOpcode(OpType.ASSIGN, name=self.name))


@dataclass
class AstNumber(AstNode):
    """An integer literal."""

    value: int

    def _lines(self, indent: int) -> Iterator[_Line]:
        yield indent, "AstNumber"
        yield indent + 1, f"value: {self.value}"

    def compile(self, compiler: Compiler) -> None:
        if compiler.optimizations.has_flag(Optimization.CONSTANT_FOLDING):
            compiler.ir.add(IrOpcode(OpType.CCTV, value=self.value))
        else:
            compiler.ir.add(IrOpcode(OpType.CREG, value=self.value, reg_name=""))


@dataclass
class AstBinaryOp(AstNode):
    """An arithmetic operation: add, sub, mul or div."""

    left: AstNode
    right: AstNode
    op: str

    def _lines(self, indent: int) -> Iterator[_Line]:
        yield indent, "AstBinaryOp"
        yield indent + 1, f"op: {self.op}"
        yield indent + 1, "left:"
        yield from self.left._lines(indent + 2)
        yield indent + 1, "right:"
        yield from self.right._lines(indent + 2)

    def compile(self, compiler: Compiler) -> None:
        self.left.compile(compiler)
        self.right.compile(compiler)
        try:
            op_type = _BINARY_OPS[self.op]
        except KeyError:
            raise CompileError(f"unknown operator {self.op}") from None
        compiler.ir.add(IrOpcode(op_type))


@dataclass
class AstReturn(AstNode):
    """A return statement with an optional expression."""

    expr: AstNode | None = None

    def _lines(self, indent: int) -> Iterator[_Line]:
        yield indent, "AstReturn"
        if self.expr is not None:
            yield from self.expr._lines(indent + 1)

    def compile(self, compiler: Compiler) -> None:
        compiler.ir.add_reset()
        if self.expr is not None:
            self.expr.compile(compiler)
        compiler.ir.add(IrOpcode(OpType.RET))


@dataclass
class AstVarRef(AstNode):
    """A read of a variable."""

    name: str

    def _lines(self, indent: int) -> Iterator[_Line]:
        yield indent, self.name

    def compile(self, compiler: Compiler) -> None:
        compiler.ir.add(IrOpcode(OpType.VARREF, name=self.name))


@dataclass
class AstAsm(AstNode):
    """Inline assembly copied verbatim to the output."""

    code: str

    def _lines(self, indent: int) -> Iterator[_Line]:
        yield indent, "AstAsm"

    def compile(self, compiler: Compiler) -> None:
        compiler.ir.add(IrOpcode(OpType.ASM, code=self.code))


@dataclass
class AstAddrof(AstNode):
    """The address of a variable."""

    name: str

    def _lines(self, indent: int) -> Iterator[_Line]:
        yield indent, f"&{self.name}"

    def compile(self, compiler: Compiler) -> None:
        compiler.ir.add(IrOpcode(OpType.ADDROF, name=self.name))


@dataclass
class AstFuncCall(AstNode):
    """A call of a function; arguments are not passed yet."""

    name: str
    args: list[AstNode] = field(default_factory=list)

    def _lines(self, indent: int) -> Iterator[_Line]:
        yield indent, "AstFuncCall"
        yield indent + 1, f"name: {self.name}"
        for arg in self.args:
            yield from arg._lines(indent + 1)

    def compile(self, compiler: Compiler) -> None:
        compiler.ir.add(IrOpcode(OpType.CALL, name=self.name))