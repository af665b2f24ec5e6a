"""SimSimi-style Tagalog chat bot: teach it answers, then ask it questions."""

from simsimi_tagalog.chat.handler import handle_query

SERVICE_NAME = "SimSimi Tagalog API"
__version__ = "1.0.0"

__all__ = ["handle_query", "SERVICE_NAME", "__version__"]
