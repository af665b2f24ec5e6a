from __future__ import annotations

from dataclasses import dataclass

from simsimi_tagalog.agent.archetypes.executor import ExecutionState
from simsimi_tagalog.agent.core.models import Command, InvalidCommand, RecallCommand, Result, TeachCommand


LEARNED = "Natuto na ako! Salamat sa pagturo!"
ALREADY_KNOWN = "Alam ko na yan!"
SAVE_FAILED = "Error sa pagsave ng database"


def _teach_suggestion(question: str, placeholder: str) -> str:
    return f"sim teach {question} | {placeholder}"


@dataclass
class Reporter:
    """Formats the response envelope returned to the caller."""

    def format(self, *, command: Command, state: ExecutionState) -> Result:
        if isinstance(command, InvalidCommand):
            return Result(status="error", message=command.reason, usage=command.usage)

        if isinstance(command, TeachCommand):
            if state.outcome == "known":
                return Result(
                    status="info",
                    message=ALREADY_KNOWN,
                    data={"ask": command.question, "answer": command.answer},
                )
            if state.outcome == "save_failed":
                return Result(status="error", message=SAVE_FAILED)
            return Result(
                status="success",
                message=LEARNED,
                data={
                    "ask": command.question,
                    "answer": command.answer,
                    "total_answers": len(state.answers),
                },
            )

        if isinstance(command, RecallCommand) and state.outcome == "found":
            return Result(
                status="success",
                message=state.selected or "",
                data={"ask": command.question, "possible_answers": state.answers},
            )

        question = command.question
        return Result(
            status="error",
            message=f"Hindi ko alam sagot diyan! Turuan mo ako: {_teach_suggestion(question, '<sagot mo>')}",
            data={"ask": question, "suggestion": _teach_suggestion(question, "<iyong sagot>")},
        )
