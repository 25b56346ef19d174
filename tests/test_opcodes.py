import pytest

from hcc.metadata import TypeMetadata
from hcc.opcodes import IrOpcode, OpType, opcode_affects_stack


@pytest.mark.parametrize("op_type", [OpType.ALLOCA, OpType.CSV])
def test_stack_opcodes_affect_stack(op_type):
    assert opcode_affects_stack(IrOpcode(op_type, md=TypeMetadata("int", 4))) is True


@pytest.mark.parametrize(
    "op_type",
    [t for t in OpType if t not in (OpType.ALLOCA, OpType.CSV)],
)
def test_other_opcodes_do_not_affect_stack(op_type):
    assert opcode_affects_stack(IrOpcode(op_type)) is False


def test_default_opcode_is_null_without_stack():
    op = IrOpcode()
    assert op.type is OpType.NULL
    assert op.need_stack is False
    assert op.md is None


def test_argument_lists_are_not_shared():
    first = IrOpcode(OpType.FUNCDEF, name="f")
    second = IrOpcode(OpType.FUNCDEF, name="g")
    first.arg_names.append("a")
    assert second.arg_names == []
    assert first.arg_names == ["a"]


def test_opcode_keeps_given_fields():
    md = TypeMetadata("char", 1)
    op = IrOpcode(OpType.ALLOCA, name="x", md=md)
    assert op.name == "x"
    assert op.md == md