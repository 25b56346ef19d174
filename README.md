# hcc

`hcc` is a small compiler for a subset of C. It takes a syntax tree of
functions, variable declarations, assignments, arithmetic, returns, calls,
address-of expressions and inline assembly, lowers it to a stack-based
intermediate representation, optimizes that representation, and emits
assembly for one of two targets:

- `qproc`
- `hypercpu` (beta)

## Usage

Build a tree from the node classes in `hcc.ast` (`AstRootNode`,
`AstFuncDef`, `AstVarDeclare`, `AstVarAssign`, `AstNumber`, `AstBinaryOp`,
`AstReturn`, `AstVarRef`, `AstAsm`, `AstAddrof`, `AstFuncCall`), then hand the
root to a `Compiler`:

```python
from hcc.ast import AstFuncDef, AstNumber, AstReturn, AstRootNode
from hcc.compiler import Compiler

root = AstRootNode(children=[
    AstFuncDef("main", children=[AstReturn(AstNumber(0))]),
])

compiler = Compiler()
compiler.select_backend("qproc")   # or Compiler("qproc")
assembly = compiler.compile(root)
```

For this tree the `qproc` backend produces:

```
main:
movi r0 0
pop ip
```

`Compiler.compile_to_file(root, path)` does the same, writes the generated
assembly to `path` and returns it. Setting `compiler.print_ast = True` prints
the tree before compiling. Any node can show its structure with `print()`, or
give it back as text with `format()`.

`AstBinaryOp` takes its operator as one of `"add"`, `"sub"`, `"mul"` or
`"div"`. `AstFuncCall` emits a call and uses the return register as its
result; its arguments are not passed.

## Optimizations

All optimizations are on by default. Each one has a name that
`hcc.compiler.optimization_from_name` turns into an `Optimization` member:

| name                        | effect                                                                  |
|-----------------------------|-------------------------------------------------------------------------|
| `constant-folding`          | literals stay compile-time constants, and arithmetic on them is folded  |
| `constant-propagation`      | variables assigned once from a constant expression are inlined          |
| `dce`                       | variables that are never read are removed with their assignments       |
| `omit-frame-pointer`        | functions that use the stack get a prologue and epilogue; others a label |
| `stack-reserve`             | stack space for locals is reserved once at the start of each function  |
| `function-body-elimination` | a function that returns at once becomes a label and a single return    |

The set of enabled optimizations lives in the compiler's `optimizations`
flags (`hcc.flags.Flags`), which offer `set_flag`, `unset_flag`, `flip_flag`
and `has_flag`.

## Errors

Failures are raised as exceptions from `hcc.errors`, all derived from
`HccError`:

- `BackendError` – an unknown backend name was given to `select_backend`
  (`no such backend`), or `compile` was called with no backend selected.
- `CompileError` – the tree could not be compiled, for example
  `unknown type vec` or `undefined variable x`.
- `HccError` itself – an unknown optimization name, or a file that
  `hcc.util.read_file` cannot open.

## Types

Both backends know `void`, `char`, `short`, `int` and `long`. On `qproc`,
`long` is four bytes wide; on `hypercpu` it is eight.

## What it does not do

The package does not read C source text: there is no lexer or parser, so
programs have to be given as trees built from the `hcc.ast` classes. There is
also no command-line program; compilation is driven from Python through
`Compiler`.