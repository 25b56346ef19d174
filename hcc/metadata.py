"""Descriptions of ABIs, types and functions used during code generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ABIMetadata:
    """Register conventions of a target."""

    return_register: str = ""
    args_registers: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class TypeMetadata:
    """A named type and its size in bytes."""

    name: str
    size: int


@dataclass
class FunctionMetadata:
    """State of the function being compiled."""

    name: str = ""
    align: int = 0
    variables: dict[str, Any] = field(default_factory=dict)