"""Core infrastructure modules"""

from dispatch.core.config import settings
from dispatch.core.database import get_db_context, get_session_factory
from dispatch.core.llm_clients import LLMClient

__all__ = ["settings", "get_db_context", "get_session_factory", "LLMClient"]
