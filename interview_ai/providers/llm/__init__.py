"""
LLM Providers Package.

Provides swappable chat-completion backends.
"""
from interview_ai.providers.llm.base import (
    BaseLLMProvider,
    LLMProvider,
    Message,
    GenerationConfig,
    LLMResponse,
    user_message,
)
from interview_ai.providers.llm.openai_provider import OpenAICompatibleProvider
from interview_ai.providers.llm.ollama_provider import OllamaProvider
from interview_ai.providers.llm.factory import (
    LLMProviderFactory,
    get_llm_provider_sync,
    close_llm_provider,
)

__all__ = [
    # Base classes
    "BaseLLMProvider",
    "LLMProvider",
    "Message",
    "GenerationConfig",
    "LLMResponse",
    # Message helpers
    "user_message",
    # Providers
    "OpenAICompatibleProvider",
    "OllamaProvider",
    # Factory
    "LLMProviderFactory",
    "get_llm_provider_sync",
    "close_llm_provider",
]
