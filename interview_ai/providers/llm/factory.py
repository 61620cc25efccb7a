"""
LLM Provider Factory.

Creates the appropriate LLM provider based on configuration.
"""
import logging
from typing import Optional

from interview_ai.core.config import load_model_config, get_settings
from interview_ai.providers.llm.base import BaseLLMProvider, LLMProvider
from interview_ai.providers.llm.openai_provider import OpenAICompatibleProvider
from interview_ai.providers.llm.ollama_provider import OllamaProvider

logger = logging.getLogger(__name__)


class LLMProviderFactory:
    """Factory for creating LLM provider instances from configuration."""
    
    @staticmethod
    def create(
        provider_type: Optional[str] = None,
        model: Optional[str] = None,
        **kwargs
    ) -> BaseLLMProvider:
        """
        Create an LLM provider instance.
        
        Args:
            provider_type: Provider type (openai-compatible, ollama). If None, reads from config.
            model: Model name. If None, reads from config.
            **kwargs: Additional provider-specific arguments.
            
        Returns:
            Configured LLM provider instance.
        """
        config = load_model_config()
        settings = get_settings()
        llm_config = config.get("providers", {}).get("llm", {})
        
        provider_type = provider_type or llm_config.get("provider", LLMProvider.OPENAI_COMPATIBLE.value)
        model = model or llm_config.get("model", "gpt-4o-mini")
        kwargs.setdefault("timeout", settings.llm_timeout_seconds)
        
        logger.info(f"Creating LLM provider: {provider_type} with model: {model}")
        
        if provider_type == LLMProvider.OPENAI_COMPATIBLE.value:
            return OpenAICompatibleProvider(
                model=model,
                api_url=kwargs.get("api_url", settings.openai_base_url),
                api_key=kwargs.get("api_key", settings.openai_api_key),
                **{k: v for k, v in kwargs.items() if k not in ["api_url", "api_key"]}
            )
        
        elif provider_type == LLMProvider.OLLAMA.value:
            return OllamaProvider(
                model=model,
                api_url=kwargs.get("api_url", settings.ollama_api_url),
                **{k: v for k, v in kwargs.items() if k not in ["api_url"]}
            )
        
        else:
            raise ValueError(f"Unsupported LLM provider: {provider_type}")


# Global provider instance (lazy loaded)
_llm_provider: Optional[BaseLLMProvider] = None


def get_llm_provider_sync() -> BaseLLMProvider:
    """
    Get the global LLM provider, creating it on first use.
    
    No health check is made; failures surface on the first call.
    """
    global _llm_provider
    if _llm_provider is None:
        _llm_provider = LLMProviderFactory.create()
    return _llm_provider


async def close_llm_provider():
    """Close and forget the global LLM provider."""
    global _llm_provider
    if _llm_provider is not None:
        await _llm_provider.close()
        _llm_provider = None
