from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class GuardDecision:
    ok: bool
    error: str | None = None


class InputGuard:
    """Rejects requests whose query is missing or not text.

    Rejection happens before the store is read.
    """

    def validate_input(self, raw: Any) -> GuardDecision:
        if not raw or not isinstance(raw, str):
            return GuardDecision(ok=False, error="Invalid request")
        return GuardDecision(ok=True, error=None)
