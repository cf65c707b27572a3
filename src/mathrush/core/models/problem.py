"""Arithmetic problem models: the four operations and an immutable problem."""

from __future__ import annotations

import operator
from enum import Enum
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Operation(Enum):
    """The fixed set of binary operations a problem can use.

    Each member carries its display glyph, the pure numeric function and a
    human-readable label.
    """

    ADDITION = ("+", operator.add, "addition")
    SUBTRACTION = ("-", operator.sub, "subtraction")
    MULTIPLICATION = ("×", operator.mul, "multiplication")
    DIVISION = ("÷", operator.truediv, "division")

    def __init__(self, symbol: str, fn: Callable[[int, int], float], label: str) -> None:
        self.symbol = symbol
        self.fn = fn
        self.label = label

    def apply(self, a: int, b: int) -> int | float:
        return self.fn(a, b)


class Problem(BaseModel):
    """A single ``operand1 <op> operand2`` problem with its precomputed answer."""

    model_config = ConfigDict(frozen=True)

    operand1: int = Field(ge=1, le=9)
    operand2: int = Field(ge=1, le=9)
    operation: Operation

    @model_validator(mode="after")
    def _check_operands(self) -> "Problem":
        if self.operation is Operation.DIVISION and self.operand1 % self.operand2 != 0:
            raise ValueError(
                f"{self.operand2} does not evenly divide {self.operand1}"
            )
        if self.operation is Operation.SUBTRACTION and self.operand1 < self.operand2:
            raise ValueError("subtraction must not produce a negative result")
        return self

    @property
    def answer(self) -> int | float:
        return self.operation.apply(self.operand1, self.operand2)

    def __str__(self) -> str:
        return f"{self.operand1} {self.operation.symbol} {self.operand2}"
