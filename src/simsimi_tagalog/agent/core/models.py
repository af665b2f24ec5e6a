from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Union


@dataclass(frozen=True)
class QueryInput:
    raw: Any
    debug: bool = False


@dataclass(frozen=True)
class TeachCommand:
    question: str
    answer: str


@dataclass(frozen=True)
class RecallCommand:
    question: str


@dataclass(frozen=True)
class InvalidCommand:
    reason: str
    usage: list[str] | None = None


Command = Union[TeachCommand, RecallCommand, InvalidCommand]


@dataclass
class Result:
    status: Literal["success", "error", "info"]
    message: str
    data: dict[str, Any] | None = None
    usage: list[str] | dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"status": self.status, "message": self.message}
        if self.data is not None:
            body["data"] = self.data
        if self.usage is not None:
            body["usage"] = self.usage
        return body


@dataclass
class InterpreterOutput:
    result: Result
    trace: list[dict[str, Any]]
    debug: dict[str, Any] = field(default_factory=dict)
