from __future__ import annotations

import os
import random

from simsimi_tagalog.agent.archetypes.command_parser import CommandParser
from simsimi_tagalog.agent.archetypes.executor import Executor
from simsimi_tagalog.agent.archetypes.reporter import Reporter
from simsimi_tagalog.agent.archetypes.run_manager import RunManager
from simsimi_tagalog.agent.governance.input_guard import InputGuard
from simsimi_tagalog.services.knowledge_store import JsonFileStore, KnowledgeStore


DEFAULT_DATABASE_FILE = "database.json"

_DEFAULT_AGENT: RunManager | None = None


def build_agent(store: KnowledgeStore | None = None, rng: random.Random | None = None) -> RunManager:
    """Build an interpreter around the given store and random source."""

    if store is None:
        store = JsonFileStore(os.getenv("DATABASE_FILE", DEFAULT_DATABASE_FILE))

    return RunManager(
        guard=InputGuard(),
        parser=CommandParser(),
        executor=Executor(store=store, rng=rng or random.Random()),
        reporter=Reporter(),
    )


def build_default_agent() -> RunManager:
    """Build (and memoize) the interpreter used by the chat handler."""

    global _DEFAULT_AGENT
    if _DEFAULT_AGENT is not None:
        return _DEFAULT_AGENT

    _DEFAULT_AGENT = build_agent()
    return _DEFAULT_AGENT
