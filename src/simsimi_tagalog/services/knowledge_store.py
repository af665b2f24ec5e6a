"""Persistence for learned answers: question -> ordered list of answers."""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)

Knowledge = dict[str, list[str]]


class KnowledgeStore(Protocol):
    def load_all(self) -> Knowledge: ...

    def save_all(self, knowledge: Knowledge) -> bool: ...


def _coerce_knowledge(raw: Any) -> Knowledge:
    # Keep only question -> list-of-strings entries.
    if not isinstance(raw, dict):
        return {}
    knowledge: Knowledge = {}
    for question, answers in raw.items():
        if not isinstance(answers, list):
            logger.warning("Dropping entry %r: answers are not a list", question)
            continue
        kept = [a for a in answers if isinstance(a, str)]
        if len(kept) != len(answers):
            logger.warning("Dropping %d non-text answer(s) for %r", len(answers) - len(kept), question)
        knowledge[question] = kept
    return knowledge


@dataclass
class JsonFileStore:
    """Stores the whole mapping as one pretty-printed JSON document.

    Reads never fail: a missing, unreadable or corrupt file loads as an empty
    mapping. Writes go to a temporary sibling and are swapped in with
    ``os.replace`` so readers never see a half-written file.
    """

    path: Path

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def load_all(self) -> Knowledge:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.debug("Starting from empty knowledge, could not read %s: %s", self.path, e)
            return {}
        return _coerce_knowledge(raw)

    def save_all(self, knowledge: Knowledge) -> bool:
        tmp: Path | None = None
        try:
            document = json.dumps(knowledge, indent=2, ensure_ascii=False)
            # One temp file per write so concurrent saves never share it.
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=self.path.name + ".",
                suffix=".tmp",
                delete=False,
            ) as fh:
                tmp = Path(fh.name)
                fh.write(document)
            os.replace(tmp, self.path)
            tmp = None
        except (OSError, TypeError, ValueError):
            logger.exception("Error saving database to %s", self.path)
            return False
        finally:
            if tmp is not None:
                tmp.unlink(missing_ok=True)
        return True


@dataclass
class InMemoryStore:
    knowledge: Knowledge = field(default_factory=dict)
    fail_writes: bool = False

    def load_all(self) -> Knowledge:
        return copy.deepcopy(self.knowledge)

    def save_all(self, knowledge: Knowledge) -> bool:
        if self.fail_writes:
            return False
        self.knowledge = copy.deepcopy(knowledge)
        return True
