"""Values on the compiler's evaluation stack."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from hcc.errors import CompileError
from hcc.metadata import TypeMetadata

_MASK = (1 << 64) - 1
_NO_TYPE = TypeMetadata("", 0)


@dataclass(eq=False)
class Value:
    """A value that lives in a register, on the stack, or only at compile time."""

    reg_name: str = ""
    is_compile_time: bool = False
    compile_time_value: int = 0
    var_stack_align: int = 0
    var_name: str = ""
    var_type: TypeMetadata = _NO_TYPE

    def is_register(self) -> bool:
        """Return whether the value is held in a register."""
        return self.reg_name != ""

    @classmethod
    def create_as_register(cls, compiler: Any, value: int, reg_name: str = "") -> Value:
        """Load a constant into a register and return it."""
        return cls(reg_name=compiler.backend.emit_mov_const(value, reg_name))

    @classmethod
    def create_as_compile_time_value(cls, compiler: Any, value: int) -> Value:
        """Return a constant known only to the compiler."""
        return cls(is_compile_time=True, compile_time_value=value & _MASK)

    @classmethod
    def create_as_stack_var(cls, compiler: Any, var_type: TypeMetadata, reserve: bool = True) -> Value:
        """Place a value of the given type in the current function's frame."""
        function = compiler.current_function
        value = cls(var_stack_align=function.align + var_type.size, var_type=var_type)
        if reserve:
            compiler.backend.emit_reserve_stack_space(var_type.size)
        function.align += var_type.size
        return value

    def use(self, compiler: Any) -> Value:
        """Return a value usable at run time, materialising a constant if needed."""
        if not self.is_compile_time:
            return self
        return Value.create_as_register(compiler, self.compile_time_value)

    def load(self, compiler: Any, load_reg: str = "") -> Value:
        """Return the value in a register, loading it from the stack if needed."""
        if self.is_register() and not self.is_compile_time:
            return self
        if self.is_compile_time:
            return self.use(compiler)
        reg = compiler.backend.emit_load_from_stack(self.var_stack_align, self.var_type.size, load_reg)
        return Value(reg_name=reg)

    def _arith(
        self,
        compiler: Any,
        other: Value,
        fold: Callable[[int, int], int],
        emit: Callable[[str, str, str], None],
    ) -> None:
        if self.is_compile_time and other.is_compile_time:
            self.compile_time_value = fold(self.compile_time_value, other.compile_time_value) & _MASK
            return

        lhs = self.load(compiler)
        rhs = other.load(compiler)
        emit(lhs.reg_name, lhs.reg_name, rhs.reg_name)

        if self.is_compile_time:
            # The result now lives in the register the constant was loaded into.
            self.is_compile_time = False
            self.reg_name = lhs.reg_name
        elif not self.is_register():
            compiler.backend.emit_store_from_stack(self.var_stack_align, self.var_type.size, lhs.reg_name)

    def add(self, compiler: Any, other: Value) -> None:
        """Add ``other`` to this value in place."""
        self._arith(compiler, other, lambda a, b: a + b, compiler.backend.emit_add)

    def sub(self, compiler: Any, other: Value) -> None:
        """Subtract ``other`` from this value in place."""
        self._arith(compiler, other, lambda a, b: a - b, compiler.backend.emit_sub)

    def mul(self, compiler: Any, other: Value) -> None:
        """Multiply this value by ``other`` in place."""
        self._arith(compiler, other, lambda a, b: a * b, compiler.backend.emit_mul)

    def div(self, compiler: Any, other: Value) -> None:
        """Divide this value by ``other`` in place (unsigned)."""
        if self.is_compile_time and other.is_compile_time and other.compile_time_value == 0:
            raise CompileError("division by zero")
        self._arith(compiler, other, lambda a, b: a // b, compiler.backend.emit_div)

    def set_to(self, compiler: Any, other: Value) -> None:
        """Assign ``other`` to this value."""
        backend = compiler.backend
        if self.is_compile_time and other.is_compile_time:
            self.compile_time_value = other.compile_time_value
            return

        if not self.is_compile_time and other.is_compile_time:
            materialised = other.use(compiler)
            if self.is_register():
                backend.emit_move(self.reg_name, materialised.reg_name)
            else:
                backend.emit_store_from_stack(self.var_stack_align, self.var_type.size, materialised.reg_name)
        elif not self.is_register() and other.is_register():
            backend.emit_store_from_stack(self.var_stack_align, self.var_type.size, other.reg_name)
        elif self.is_register() and other.is_register():
            backend.emit_move(self.reg_name, other.reg_name)
        elif not self.is_register() and not other.is_register():
            lhs = self.load(compiler)
            other.load(compiler)
            backend.emit_store_from_stack(self.var_stack_align, self.var_type.size, lhs.reg_name)
        else:
            rhs = other.load(compiler)
            backend.emit_move(self.reg_name, rhs.reg_name)