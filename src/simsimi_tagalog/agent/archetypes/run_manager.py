from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

from simsimi_tagalog.agent.archetypes.command_parser import CommandParser
from simsimi_tagalog.agent.archetypes.executor import Executor
from simsimi_tagalog.agent.archetypes.reporter import Reporter
from simsimi_tagalog.agent.core.models import InterpreterOutput, QueryInput, Result
from simsimi_tagalog.agent.governance.input_guard import InputGuard

logger = logging.getLogger(__name__)


@dataclass
class RunManager:
    guard: InputGuard
    parser: CommandParser
    executor: Executor
    reporter: Reporter

    def run(self, query_input: QueryInput) -> InterpreterOutput:
        trace: list[dict[str, Any]] = []

        def emit(stage: str, message: str, data: dict[str, Any] | None = None) -> None:
            trace.append({"ts": time.time(), "stage": stage, "message": message, "data": data})

        raw = query_input.raw
        emit("input", "received input", {"chars": len(raw) if isinstance(raw, str) else None})

        decision = self.guard.validate_input(raw)
        if not decision.ok:
            emit("guard", "input rejected", {"error": decision.error})
            logger.info("Rejected query of type %s", type(raw).__name__)
            result = Result(status="error", message=decision.error or "Invalid request")
            return InterpreterOutput(result=result, trace=trace, debug={"trace": trace})

        command = self.parser.parse(raw)
        kind = type(command).__name__
        emit("parse", "parsed command", {"command": kind})

        state = self.executor.execute(command)
        emit("execute", "executed command", {"outcome": state.outcome, "answers": len(state.answers)})

        result = self.reporter.format(command=command, state=state)
        emit("report", "formatted result", {"status": result.status})

        logger.info("Handled %s: outcome=%s status=%s", kind, state.outcome, result.status)
        emit("output", "returning output", {"debug": bool(query_input.debug)})

        return InterpreterOutput(result=result, trace=trace, debug={"command": kind, "trace": trace})
