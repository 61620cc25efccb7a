"""
OpenAI-compatible Provider Implementation.

Talks to any server exposing the ``/chat/completions`` API (OpenAI,
vLLM, LM Studio, ...).
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


class OpenAICompatibleProvider(BaseLLMProvider):
    """Chat-completions provider using the OpenAI wire format."""
    
    def __init__(
        self,
        model: str,
        api_url: str = "https://api.openai.com/v1",
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        **kwargs
    ):
        """
        Initialize the provider.
        
        Args:
            model: Model name (e.g., "gpt-4o-mini")
            api_url: Base URL of the API, without the /chat/completions suffix
            api_key: Bearer token sent with each request
            timeout: Request timeout in seconds
        """
        super().__init__(model, **kwargs)
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers=self._build_headers(),
        )
    
    def _build_headers(self) -> dict:
        """Build request headers."""
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers
    
    async def generate(
        self,
        messages: List[Message],
        config: Optional[GenerationConfig] = None,
    ) -> LLMResponse:
        """Generate a response using the chat completions API."""
        config = config or GenerationConfig()
        start_time = time.time()
        
        payload = {
            "model": self.model,
            "messages": [msg.to_dict() for msg in messages],
            "max_tokens": config.max_tokens,
            "temperature": config.temperature,
            "stream": False,
        }
        
        try:
            response = await self._client.post(
                f"{self.api_url}/chat/completions",
                json=payload,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Chat completions API error: {e.response.status_code} - {e.response.text}")
            raise
        except httpx.RequestError as e:
            logger.error(f"Chat completions connection error: {e}")
            raise
        
        data = response.json()
        latency_ms = (time.time() - start_time) * 1000
        
        choice = data["choices"][0]
        return LLMResponse(
            content=choice["message"].get("content"),
            model=data.get("model", self.model),
            finish_reason=choice.get("finish_reason"),
            usage=data.get("usage"),
            latency_ms=latency_ms,
        )
    
    async def close(self):
        """Close the HTTP client."""
        await self._client.aclose()
