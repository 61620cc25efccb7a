"""
Ollama Provider Implementation.

Connects to a local Ollama server. Useful for development without an
API key.
"""
import time
import logging
from typing import List, Optional

import httpx

from interview_ai.providers.llm.base import (
    BaseLLMProvider,
    Message,
    GenerationConfig,
    LLMResponse,
)

logger = logging.getLogger(__name__)


class OllamaProvider(BaseLLMProvider):
    """Ollama provider for local LLM inference."""
    
    def __init__(
        self,
        model: str,
        api_url: str = "http://localhost:11434",
        timeout: float = 30.0,
        **kwargs
    ):
        super().__init__(model, **kwargs)
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
        )
    
    async def generate(
        self,
        messages: List[Message],
        config: Optional[GenerationConfig] = None,
    ) -> LLMResponse:
        """Generate a response using Ollama's chat API."""
        config = config or GenerationConfig()
        start_time = time.time()
        
        payload = {
            "model": self.model,
            "messages": [msg.to_dict() for msg in messages],
            "stream": False,
            "options": {
                "num_predict": config.max_tokens,
                "temperature": config.temperature,
            }
        }
        
        try:
            response = await self._client.post(
                f"{self.api_url}/api/chat",
                json=payload,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Ollama API error: {e.response.status_code} - {e.response.text}")
            raise
        except httpx.RequestError as e:
            logger.error(f"Ollama connection error: {e}")
            raise
        
        data = response.json()
        latency_ms = (time.time() - start_time) * 1000
        
        prompt_tokens = data.get("prompt_eval_count", 0)
        completion_tokens = data.get("eval_count", 0)
        return LLMResponse(
            content=data["message"].get("content"),
            model=data.get("model", self.model),
            finish_reason="stop" if data.get("done") else None,
            usage={
                "prompt_tokens": prompt_tokens,
                "completion_tokens": completion_tokens,
                "total_tokens": prompt_tokens + completion_tokens,
            },
            latency_ms=latency_ms,
        )
    
    async def close(self):
        """Close the HTTP client."""
        await self._client.aclose()
