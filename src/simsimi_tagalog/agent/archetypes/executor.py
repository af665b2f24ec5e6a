from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Literal

from simsimi_tagalog.agent.core.models import Command, RecallCommand, TeachCommand
from simsimi_tagalog.services.knowledge_store import KnowledgeStore


Outcome = Literal["learned", "known", "save_failed", "found", "unknown", "invalid"]


@dataclass
class ExecutionState:
    outcome: Outcome
    answers: list[str] = field(default_factory=list)
    selected: str | None = None


@dataclass
class Executor:
    """Runs a parsed command against the knowledge store."""

    store: KnowledgeStore
    rng: random.Random = field(default_factory=random.Random)

    def execute(self, command: Command) -> ExecutionState:
        if isinstance(command, TeachCommand):
            return self._teach(command)
        if isinstance(command, RecallCommand):
            return self._recall(command)
        return ExecutionState(outcome="invalid")

    def _teach(self, command: TeachCommand) -> ExecutionState:
        knowledge = self.store.load_all()
        answers = knowledge.setdefault(command.question, [])

        if command.answer in answers:
            return ExecutionState(outcome="known", answers=list(answers))

        answers.append(command.answer)
        if not self.store.save_all(knowledge):
            return ExecutionState(outcome="save_failed")

        return ExecutionState(outcome="learned", answers=list(answers))

    def _recall(self, command: RecallCommand) -> ExecutionState:
        answers = self.store.load_all().get(command.question) or []
        if not answers:
            return ExecutionState(outcome="unknown")

        return ExecutionState(outcome="found", answers=list(answers), selected=self.rng.choice(answers))
