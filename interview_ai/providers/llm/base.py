"""
LLM Provider Interface and Base Classes.

Defines the abstract interface for chat-completion backends so the
gateway can talk to an OpenAI-compatible endpoint or a local Ollama
server without caring which one is configured.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Dict, Any, Optional
from enum import Enum


class LLMProvider(str, Enum):
    """Supported LLM provider backends."""
    OPENAI_COMPATIBLE = "openai-compatible"
    OLLAMA = "ollama"


@dataclass
class Message:
    """Chat message structure."""
    role: str  # "system", "user", "assistant"
    content: str
    
    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class GenerationConfig:
    """Configuration for text generation."""
    max_tokens: int = 500
    temperature: float = 0.7
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }


@dataclass
class LLMResponse:
    """Response from LLM generation."""
    content: Optional[str]
    model: str
    finish_reason: Optional[str] = None
    usage: Optional[Dict[str, int]] = None  # prompt_tokens, completion_tokens, total_tokens
    latency_ms: Optional[float] = None
    
    @property
    def tokens_used(self) -> int:
        """Total tokens used (prompt + completion)."""
        return self.usage.get("total_tokens", 0) if self.usage else 0


class BaseLLMProvider(ABC):
    """
    Abstract base class for LLM providers.
    
    All LLM backends must implement this interface to be swappable.
    """
    
    def __init__(self, model: str, **kwargs):
        self.model = model
        self.config = kwargs
    
    @abstractmethod
    async def generate(
        self,
        messages: List[Message],
        config: Optional[GenerationConfig] = None,
    ) -> LLMResponse:
        """
        Generate a response from the LLM.
        
        Args:
            messages: List of chat messages
            config: Generation configuration (temperature, max_tokens)
            
        Returns:
            LLMResponse with generated content and metadata
            
        Raises:
            httpx.HTTPError: On transport failure or non-2xx status
            KeyError, IndexError, TypeError: On a malformed response body
        """
        pass
    
    async def close(self):
        """Release any held resources."""
        pass


# Convenience functions for creating messages
def user_message(content: str) -> Message:
    """Create a user message."""
    return Message(role="user", content=content)
