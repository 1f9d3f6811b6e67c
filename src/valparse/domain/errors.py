"""Errors raised by the rule evaluator.

INVARIANT: Every failed evaluation surfaces as exactly one ValidationError.
Invalid data and faulting rules are told apart by ``failure.kind`` and by
the message shape, never by exception type.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel

PARSE_FAULT_LABEL = "Failed to parse result"


class FailureKind(StrEnum):
    """Why an evaluation stopped."""

    INVALID = "invalid"
    FAULT = "fault"


class Failure(BaseModel):
    """Structured description of the first failing rule."""

    model_config = {"frozen": True}

    label: str
    kind: FailureKind
    rendered: str
    fault_type: str | None = None
    fault_message: str | None = None

    @property
    def message(self) -> str:
        if self.kind is FailureKind.INVALID:
            return f"{self.label}: {self.rendered}"
        return f"{self.label} ({self.fault_type}): {self.rendered}\n{self.fault_message}"


class ValidationError(ValueError):
    """A rule rejected the input, or a rule or the parse step raised.

    Attributes:
        label: The failing rule's label (``"Failed to parse result"`` for
            a faulting parse step).
        data: The original input, never the parsed value.
        fault: The exception raised during evaluation, if any.
        failure: The structured :class:`Failure` behind the message.
    """

    def __init__(self, failure: Failure, data: Any, fault: BaseException | None = None) -> None:
        super().__init__(failure.message)
        self.failure = failure
        self.label = failure.label
        self.data = data
        self.fault = fault


class RuleConfigError(TypeError):
    """The rule configuration cannot be evaluated as given."""
