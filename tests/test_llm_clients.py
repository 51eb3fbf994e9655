"""
Tests for the generation client contract.
"""

from types import SimpleNamespace
from typing import Optional
from unittest.mock import AsyncMock

import pytest

from dispatch.core.exceptions import (
    GENERIC_ERROR_MESSAGE,
    EmptyGenerationError,
    GenerationError,
)
from dispatch.core.llm_clients import (
    AnthropicClient,
    BaseLLMClient,
    LLMClient,
    LLMMessage,
    LLMProvider,
    LLMResponse,
)


class StubProvider(BaseLLMClient):
    def __init__(self, content: str = "", error: Optional[Exception] = None):
        self.content = content
        self.error = error
        self.messages: list[LLMMessage] = []
        self.max_tokens: Optional[int] = None
        self.closed = False

    async def generate(self, messages, model=None, temperature=None, max_tokens=None) -> LLMResponse:
        self.messages = messages
        self.max_tokens = max_tokens
        if self.error:
            raise self.error
        return LLMResponse(
            content=self.content,
            model="stub",
            provider=LLMProvider.ANTHROPIC,
            tokens_used=3,
            prompt_tokens=2,
            completion_tokens=1,
        )

    async def close(self) -> None:
        self.closed = True


def client_with(stub: StubProvider) -> LLMClient:
    client = LLMClient(default_provider=LLMProvider.ANTHROPIC)
    client._anthropic = stub
    return client


@pytest.mark.asyncio
async def test_generate_text_sends_system_and_user_messages():
    stub = StubProvider(content="  Post body \n")

    text = await client_with(stub).generate_text("system rules", "write it", max_tokens=256)

    assert text == "Post body"
    assert [(m.role, m.content) for m in stub.messages] == [
        ("system", "system rules"),
        ("user", "write it"),
    ]
    assert stub.max_tokens == 256


@pytest.mark.asyncio
async def test_whitespace_output_is_empty_generation():
    with pytest.raises(EmptyGenerationError):
        await client_with(StubProvider(content=" \n\t")).generate_text("s", "u")


@pytest.mark.asyncio
async def test_provider_errors_become_generation_errors():
    stub = StubProvider(error=ValueError("bad gateway"))

    with pytest.raises(GenerationError) as exc_info:
        await client_with(stub).generate_text("s", "u")

    assert isinstance(exc_info.value.__cause__, ValueError)
    assert exc_info.value.message == GENERIC_ERROR_MESSAGE
    assert "bad gateway" not in str(exc_info.value)


@pytest.mark.asyncio
async def test_close_releases_created_providers():
    stub = StubProvider(content="x")
    client = client_with(stub)

    await client.close()

    assert stub.closed
    assert client._anthropic is None


@pytest.mark.asyncio
async def test_anthropic_non_text_response_is_rejected():
    provider = AnthropicClient()
    provider.client.messages.create = AsyncMock(
        return_value=SimpleNamespace(
            content=[SimpleNamespace(type="tool_use")],
            usage=SimpleNamespace(input_tokens=1, output_tokens=1),
        )
    )

    with pytest.raises(GenerationError):
        await provider.generate([LLMMessage(role="user", content="hi")])

    await provider.close()


@pytest.mark.asyncio
async def test_anthropic_system_message_is_sent_separately():
    provider = AnthropicClient()
    provider.client.messages.create = AsyncMock(
        return_value=SimpleNamespace(
            content=[SimpleNamespace(type="text", text="hello")],
            usage=SimpleNamespace(input_tokens=5, output_tokens=2),
        )
    )

    response = await provider.generate(
        [LLMMessage(role="system", content="rules"), LLMMessage(role="user", content="hi")],
        max_tokens=100,
    )

    kwargs = provider.client.messages.create.call_args.kwargs
    assert kwargs["system"] == "rules"
    assert kwargs["messages"] == [{"role": "user", "content": "hi"}]
    assert kwargs["max_tokens"] == 100
    assert response.content == "hello"
    assert response.tokens_used == 7

    await provider.close()
