"""Service layer: the orchestration facade used by conversation front-ends."""

from .llm_service import LLMService, prepare_messages

__all__ = ["LLMService", "prepare_messages"]
