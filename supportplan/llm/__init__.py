from .base import BaseLLMService
from .factory import get_llm_service
from .types import GenerationOptions, LLMResponse

__all__ = ["BaseLLMService", "GenerationOptions", "LLMResponse", "get_llm_service"]
