from __future__ import annotations

from dataclasses import dataclass

from simsimi_tagalog.agent.core.models import Command, InvalidCommand, RecallCommand, TeachCommand


SIM_PREFIX = "sim "
TEACH_PREFIX = "teach "

UNKNOWN_COMMAND = 'Maling command. Dapat magsimula sa "sim"'
COMMAND_USAGE = ["sim <message>", "sim teach <ask> | <answer>"]
BAD_TEACH_FORMAT = "Mali ang format. Gamitin: sim teach <tanong> | <sagot>"
MISSING_TEACH_PART = "Kailangan parehong may tanong at sagot. Gamitin: sim teach <tanong> | <sagot>"
MISSING_QUESTION = "Pakilagay ang tanong. Gamitin: sim <tanong>"


def normalize_question(text: str) -> str:
    return text.strip().lower()


@dataclass
class CommandParser:
    """Turns a raw ``sim ...`` line into a teach, recall or invalid command.

    - ``sim teach <question> | <answer>`` teaches an answer.
    - ``sim <question>`` recalls one.

    Prefixes are matched case-insensitively. Questions are normalized
    (trimmed, lower-cased); answers are only trimmed.
    """

    def parse(self, raw: str) -> Command:
        text = raw.strip()
        if not text.lower().startswith(SIM_PREFIX):
            return InvalidCommand(reason=UNKNOWN_COMMAND, usage=list(COMMAND_USAGE))

        command = text[len(SIM_PREFIX):].strip()
        if command.lower().startswith(TEACH_PREFIX):
            return self._parse_teach(command[len(TEACH_PREFIX):].strip())

        question = normalize_question(command)
        if not question:
            return InvalidCommand(reason=MISSING_QUESTION)
        return RecallCommand(question=question)

    @staticmethod
    def _parse_teach(body: str) -> Command:
        # Exactly one separator; "a | b | c" is rejected, not truncated.
        parts = body.split("|")
        if len(parts) != 2:
            return InvalidCommand(reason=BAD_TEACH_FORMAT)

        question = normalize_question(parts[0])
        answer = parts[1].strip()
        if not question or not answer:
            return InvalidCommand(reason=MISSING_TEACH_PART)

        return TeachCommand(question=question, answer=answer)
