"""
Language-Model Gateway.

A single chat-completion call per prompt, bounded by a timeout. Every
failure mode is reported as ``UpstreamError`` so callers only have one
thing to catch.
"""
import asyncio
import logging
from typing import Optional

import httpx

from interview_ai.core.config import get_settings, load_model_config
from interview_ai.core.errors import UpstreamError
from interview_ai.providers.llm import (
    BaseLLMProvider,
    GenerationConfig,
    user_message,
    get_llm_provider_sync,
)

logger = logging.getLogger(__name__)


def default_generation_config() -> GenerationConfig:
    """Generation parameters from models.yaml, falling back to 500 tokens at 0.7."""
    generation = load_model_config().get("providers", {}).get("llm", {}).get("generation", {})
    return GenerationConfig(
        max_tokens=int(generation.get("max_tokens", 500)),
        temperature=float(generation.get("temperature", 0.7)),
    )


class LanguageModelGateway:
    """Sends one prompt to the configured LLM provider and returns its text."""
    
    def __init__(
        self,
        llm_provider: Optional[BaseLLMProvider] = None,
        timeout: Optional[float] = None,
        generation_config: Optional[GenerationConfig] = None,
    ):
        self._llm = llm_provider
        self.timeout = timeout if timeout is not None else get_settings().llm_timeout_seconds
        self.generation_config = generation_config or default_generation_config()
    
    @property
    def llm(self) -> BaseLLMProvider:
        if self._llm is None:
            self._llm = get_llm_provider_sync()
        return self._llm
    
    async def generate_text(self, prompt: str) -> str:
        """
        Send ``prompt`` as a single user message.
        
        Returns:
            The trimmed completion text
            
        Raises:
            UpstreamError: On transport failure, non-2xx status, timeout,
                a malformed response or empty content
        """
        try:
            response = await asyncio.wait_for(
                self.llm.generate([user_message(prompt)], self.generation_config),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"Language model call timed out after {self.timeout}s")
            raise UpstreamError("Language model request timed out")
        except httpx.HTTPStatusError as e:
            logger.error(f"Language model returned HTTP {e.response.status_code}")
            raise UpstreamError()
        except httpx.HTTPError as e:
            logger.error(f"Language model request failed: {e}")
            raise UpstreamError()
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Malformed language model response: {e!r}")
            raise UpstreamError("Malformed response from language model")
        
        content = response.content
        if not isinstance(content, str) or not content.strip():
            logger.error("Language model returned no content")
            raise UpstreamError("No response from language model")
        
        return content.strip()


# Global gateway instance
_gateway: Optional[LanguageModelGateway] = None


def get_gateway() -> LanguageModelGateway:
    """Get or create the global gateway."""
    global _gateway
    if _gateway is None:
        _gateway = LanguageModelGateway()
    return _gateway
