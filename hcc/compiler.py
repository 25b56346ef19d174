"""The compiler driver: backend selection, optimization flags and code generation."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from hcc.backend.base import Backend
from hcc.backend.hypercpu import HyperCPUBackend
from hcc.backend.qproc import QprocBackend
from hcc.errors import BackendError, HccError
from hcc.flags import Flags
from hcc.ir import IR
from hcc.metadata import FunctionMetadata
from hcc.value import Value

if TYPE_CHECKING:
    from hcc.ast import AstNode


class Optimization(Enum):
    """Optimizations that can be switched on and off, by their command-line names."""

    CONSTANT_FOLDING = "constant-folding"
    FUNCTION_BODY_ELIMINATION = "function-body-elimination"
    DCE = "dce"
    FP_OMISSION = "omit-frame-pointer"
    STACK_RESERVE = "stack-reserve"
    CONSTANT_PROPAGATION = "constant-propagation"


def optimization_from_name(name: str) -> Optimization:
    """Return the optimization with the given name, raising HccError if there is none."""
    try:
        return Optimization(name)
    except ValueError:
        raise HccError(f"no such optimization: {name}") from None


_BACKENDS: dict[str, type[Backend]] = {
    "qproc": QprocBackend,
    "hypercpu": HyperCPUBackend,
}


class Compiler:
    """Compiles one syntax tree to assembly for the selected backend."""

    def __init__(self, backend: str | None = None) -> None:
        self.backend: Backend | None = None
        self.print_ast = False
        self.ir = IR()
        self.optimizations: Flags[Optimization] = Flags(*Optimization)
        self.current_function = FunctionMetadata()
        self.values: list[Value] = []
        if backend is not None:
            self.select_backend(backend)

    def select_backend(self, name: str) -> Backend:
        """Replace the backend by the one with the given name and return it."""
        self.backend = None
        try:
            self.backend = _BACKENDS[name]()
        except KeyError:
            raise BackendError("no such backend") from None
        return self.backend

    def compile(self, root: AstNode) -> str:
        """Compile the tree and return the generated assembly."""
        if self.backend is None:
            raise BackendError("no backend selected")
        if self.print_ast:
            root.print()
        root.compile(self)
        error = self.ir.results_in_error(self)
        if error is not None:
            raise error
        self.ir.perform_static_optimizations(self)
        self.ir.compile(self)
        return self.backend.output

    def compile_to_file(self, root: AstNode, path: str) -> str:
        """Compile the tree, write the assembly to ``path`` and return it."""
        output = self.compile(root)
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(output)
        return output