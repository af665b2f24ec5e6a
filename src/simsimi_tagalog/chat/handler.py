"""Chat handler: interpret one ``sim`` query and return the response envelope."""

from __future__ import annotations

from typing import Any

from simsimi_tagalog.agent.archetypes.run_manager import RunManager
from simsimi_tagalog.agent.core.models import QueryInput
from simsimi_tagalog.agent.factory import build_default_agent


def handle_query(query: Any, debug: bool = False, agent: RunManager | None = None):
    """Interpret a query and return its result as a JSON-ready dict.

    - If `debug` is False: returns `dict`.
    - If `debug` is True: returns `(dict, dict)`, the second item holding the
      parsed command kind and the pipeline `trace`.
    """

    agent = agent or build_default_agent()
    output = agent.run(QueryInput(raw=query, debug=debug))

    if debug:
        return output.result.to_dict(), output.debug
    return output.result.to_dict()
