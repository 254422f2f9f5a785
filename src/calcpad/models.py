"""
Core data models for calcpad.

Defines the input events the engine accepts and the display snapshot it
hands back to the rendering layer.
"""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# Enums
# =============================================================================

class Operator(str, Enum):
    """Binary arithmetic operators."""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"


class InputKind(str, Enum):
    """Every input event the engine understands."""
    DIGIT = "digit"
    DECIMAL_POINT = "decimal_point"
    OPERATOR = "operator"
    EVALUATE = "evaluate"
    PERCENT = "percent"
    TOGGLE_SIGN = "toggle_sign"
    CLEAR_ALL = "clear_all"
    CLEAR_ENTRY = "clear_entry"
    BACKSPACE = "backspace"
    MEMORY_STORE = "memory_store"
    MEMORY_RECALL = "memory_recall"
    MEMORY_ADD = "memory_add"
    MEMORY_SUBTRACT = "memory_subtract"
    MEMORY_CLEAR = "memory_clear"


# =============================================================================
# Input Models
# =============================================================================

class InputEvent(BaseModel):
    """
    A single input event.

    `digit` is required for DIGIT events and `operator` for OPERATOR
    events; both are rejected on any other kind.
    """
    kind: InputKind
    digit: int | None = Field(None, ge=0, le=9)
    operator: Operator | None = None

    @model_validator(mode="after")
    def _check_parameters(self) -> "InputEvent":
        if (self.kind == InputKind.DIGIT) != (self.digit is not None):
            raise ValueError("digit is required for, and only for, digit events")
        if (self.kind == InputKind.OPERATOR) != (self.operator is not None):
            raise ValueError("operator is required for, and only for, operator events")
        return self

    @classmethod
    def for_digit(cls, digit: int) -> "InputEvent":
        return cls(kind=InputKind.DIGIT, digit=digit)

    @classmethod
    def for_operator(cls, op: Operator | str) -> "InputEvent":
        return cls(kind=InputKind.OPERATOR, operator=Operator(op))


class KeyPress(BaseModel):
    """A physical key name, e.g. "7", "Enter" or "Escape"."""
    key: str = Field(..., min_length=1, max_length=32)


# =============================================================================
# Display Models
# =============================================================================

class DisplaySnapshot(BaseModel):
    """What the rendering layer should show after an operation."""
    primary: str = Field(..., description="Formatted current entry, or 'Error'")
    secondary: str = Field("", description="Raw pending expression")
