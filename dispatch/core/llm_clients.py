"""
LLM client abstraction for Anthropic and OpenAI.
Provides a unified text-generation interface with retry logic and token counts.
"""

import asyncio
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Protocol

import anthropic
import openai
import structlog
from anthropic import AsyncAnthropic
from openai import AsyncOpenAI
from pydantic import BaseModel
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from dispatch.core.config import settings
from dispatch.core.exceptions import (
    GENERIC_ERROR_MESSAGE,
    EmptyGenerationError,
    GenerationError,
)

logger = structlog.get_logger(__name__)

# Transport failures worth another attempt
RETRYABLE_ERRORS = (
    asyncio.TimeoutError,
    ConnectionError,
    anthropic.APIConnectionError,
    openai.APIConnectionError,
)


class LLMProvider(str, Enum):
    """Supported LLM providers."""
    ANTHROPIC = "anthropic"
    OPENAI = "openai"


class LLMMessage(BaseModel):
    """Message format for LLM conversations."""
    role: str  # "system", "user", "assistant"
    content: str


class LLMResponse(BaseModel):
    """Standardized LLM response."""
    content: str
    model: str
    provider: LLMProvider
    tokens_used: int
    prompt_tokens: int
    completion_tokens: int


class TextGenerator(Protocol):
    """Anything that turns a (system, user) prompt pair into post text."""

    async def generate_text(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: Optional[int] = None,
    ) -> str:
        ...


class BaseLLMClient(ABC):
    """Abstract base class for LLM clients."""

    @abstractmethod
    async def generate(
        self,
        messages: list[LLMMessage],
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """Generate completion from messages."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        pass


class AnthropicClient(BaseLLMClient):
    """Anthropic API client with retry logic."""

    def __init__(self):
        self.client = AsyncAnthropic(api_key=settings.anthropic_api_key)
        self.default_model = settings.anthropic_model_primary

    @retry(
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        stop=stop_after_attempt(settings.llm_max_retries),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def generate(
        self,
        messages: list[LLMMessage],
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """Generate completion using Anthropic API."""
        model = model or self.default_model
        temperature = temperature if temperature is not None else settings.llm_temperature
        max_tokens = max_tokens or settings.llm_max_tokens

        # Separate system message from conversation
        system_message = ""
        conversation_messages = []

        for msg in messages:
            if msg.role == "system":
                system_message = msg.content
            else:
                conversation_messages.append({
                    "role": msg.role,
                    "content": msg.content,
                })

        logger.debug("Anthropic request", model=model, message_count=len(messages))

        request_params = {
            "model": model,
            "messages": conversation_messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        if system_message:
            request_params["system"] = system_message

        response = await asyncio.wait_for(
            self.client.messages.create(**request_params),
            timeout=settings.llm_timeout,
        )

        if not response.content or response.content[0].type != "text":
            raise GenerationError("Anthropic returned a non-text response")

        prompt_tokens = response.usage.input_tokens
        completion_tokens = response.usage.output_tokens

        return LLMResponse(
            content=response.content[0].text,
            model=model,
            provider=LLMProvider.ANTHROPIC,
            tokens_used=prompt_tokens + completion_tokens,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
        )

    async def close(self) -> None:
        await self.client.close()


class OpenAIClient(BaseLLMClient):
    """OpenAI API client with retry logic."""

    def __init__(self):
        self.client = AsyncOpenAI(api_key=settings.openai_api_key)
        self.default_model = settings.openai_model_primary

    @retry(
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        stop=stop_after_attempt(settings.llm_max_retries),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def generate(
        self,
        messages: list[LLMMessage],
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """Generate completion using OpenAI API."""
        model = model or self.default_model
        temperature = temperature if temperature is not None else settings.llm_temperature
        max_tokens = max_tokens or settings.llm_max_tokens

        logger.debug("OpenAI request", model=model, message_count=len(messages))

        response = await asyncio.wait_for(
            self.client.chat.completions.create(
                model=model,
                messages=[{"role": m.role, "content": m.content} for m in messages],
                temperature=temperature,
                max_tokens=max_tokens,
            ),
            timeout=settings.llm_timeout,
        )

        content = response.choices[0].message.content
        if content is None:
            raise GenerationError("OpenAI returned a non-text response")

        prompt_tokens = response.usage.prompt_tokens
        completion_tokens = response.usage.completion_tokens

        return LLMResponse(
            content=content,
            model=model,
            provider=LLMProvider.OPENAI,
            tokens_used=prompt_tokens + completion_tokens,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
        )

    async def close(self) -> None:
        await self.client.close()


class LLMClient:
    """
    Unified LLM client that routes to the configured provider.

    Created once per process (see the API lifespan) and passed to services.
    """

    def __init__(self, default_provider: Optional[LLMProvider] = None):
        # Lazy initialization - only build the clients that get used
        self._anthropic: Optional[AnthropicClient] = None
        self._openai: Optional[OpenAIClient] = None

        if default_provider:
            self.default_provider = default_provider
        else:
            provider_map = {
                "anthropic": LLMProvider.ANTHROPIC,
                "openai": LLMProvider.OPENAI,
            }
            self.default_provider = provider_map.get(
                settings.default_llm_provider.lower(),
                LLMProvider.ANTHROPIC,
            )

    @property
    def anthropic(self) -> AnthropicClient:
        """Lazy load Anthropic client."""
        if self._anthropic is None:
            self._anthropic = AnthropicClient()
        return self._anthropic

    @property
    def openai(self) -> OpenAIClient:
        """Lazy load OpenAI client."""
        if self._openai is None:
            self._openai = OpenAIClient()
        return self._openai

    def _get_client(self, provider: Optional[LLMProvider] = None) -> BaseLLMClient:
        """Get client for specified provider."""
        provider = provider or self.default_provider
        if provider == LLMProvider.OPENAI:
            return self.openai
        return self.anthropic

    async def generate(
        self,
        messages: list[LLMMessage],
        provider: Optional[LLMProvider] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """Generate completion using specified provider."""
        client = self._get_client(provider)
        return await client.generate(
            messages=messages,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
        )

    async def generate_text(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        Generate trimmed text for a system/user prompt pair.

        Raises:
            GenerationError: provider or transport failure, non-text output
            EmptyGenerationError: the model returned only whitespace
        """
        messages = [
            LLMMessage(role="system", content=system_prompt),
            LLMMessage(role="user", content=user_prompt),
        ]

        try:
            response = await self.generate(messages, max_tokens=max_tokens)
        except Exception as e:
            logger.error(
                "Generation request failed",
                error_type=type(e).__name__,
                error=str(e),
            )
            raise GenerationError(GENERIC_ERROR_MESSAGE) from e

        text = response.content.strip()
        if not text:
            raise EmptyGenerationError("Generation produced empty content.")

        logger.debug(
            "Generation complete",
            provider=response.provider.value,
            model=response.model,
            tokens_used=response.tokens_used,
        )
        return text

    async def close(self) -> None:
        """Close any provider clients that were created."""
        for client in (self._anthropic, self._openai):
            if client is not None:
                await client.close()
        self._anthropic = None
        self._openai = None
