import dataclasses

import pytest

from hcc.metadata import ABIMetadata, FunctionMetadata, TypeMetadata


def test_type_metadata_equality():
    assert TypeMetadata("int", 4) == TypeMetadata("int", 4)
    assert TypeMetadata("int", 4) != TypeMetadata("long", 4)


def test_type_metadata_is_immutable():
    md = TypeMetadata("char", 1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        md.size = 2
    assert md.size == 1


def test_abi_defaults_are_independent():
    first = ABIMetadata()
    second = ABIMetadata()
    first.args_registers.append("r2")
    assert second.args_registers == []
    assert first.return_register == ""


def test_function_metadata_defaults():
    fn = FunctionMetadata()
    assert fn.align == 0
    assert fn.name == ""
    fn.variables["x"] = 1
    assert FunctionMetadata().variables == {}