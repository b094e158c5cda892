"""Tests for the OpenAI client wrapper."""

import json
from types import SimpleNamespace

import pytest
from unittest.mock import AsyncMock

from reactiongif.models.strategy import SearchStrategy, Selection
from reactiongif.services.openai_client import OpenAIClient
from reactiongif.utils.exceptions import ExternalServiceError


def completion(content: str | None, usage: bool = True) -> SimpleNamespace:
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(prompt_tokens=10, completion_tokens=5, total_tokens=15)
        if usage
        else None,
    )


@pytest.fixture
def client():
    """Create client with a mocked completions endpoint."""
    openai_client = OpenAIClient(api_key="sk-test", default_model="gpt-4o-mini")
    openai_client._client.chat.completions.create = AsyncMock()
    return openai_client


def create_kwargs(client) -> dict:
    return client._client.chat.completions.create.await_args.kwargs


class TestOpenAIClient:
    """Tests for OpenAIClient."""

    def test_sdk_retries_disabled(self, client):
        """Test SDK retries are disabled."""
        assert client._client.max_retries == 0

    @pytest.mark.asyncio
    async def test_complete_json_request(self, client):
        """Test JSON completion request."""
        client._client.chat.completions.create.return_value = completion('{"a": 1}')

        result = await client.complete_json("hello", system_prompt="Answer in JSON")

        assert result == {"a": 1}
        kwargs = create_kwargs(client)
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["max_completion_tokens"] == 4000
        assert kwargs["messages"] == [
            {"role": "system", "content": "Answer in JSON"},
            {"role": "user", "content": "hello"},
        ]
        assert "temperature" not in kwargs

    @pytest.mark.asyncio
    async def test_temperature_sent_when_set(self):
        """Test temperature is sent only when set."""
        client = OpenAIClient(api_key="sk-test", temperature=0.3)
        client._client.chat.completions.create = AsyncMock(return_value=completion("{}", usage=False))

        await client.complete_json("hello", model="gpt-5-mini")

        kwargs = create_kwargs(client)
        assert kwargs["temperature"] == 0.3
        assert kwargs["model"] == "gpt-5-mini"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [None, "", "not json"])
    async def test_unusable_content_raises(self, client, content):
        """Test unusable content raises."""
        client._client.chat.completions.create.return_value = completion(content)

        with pytest.raises(ExternalServiceError):
            await client.complete_json("hello")

    @pytest.mark.asyncio
    async def test_api_failure_raises(self, client):
        """Test API failure raises after one attempt."""
        client._client.chat.completions.create.side_effect = RuntimeError("rate limited")

        with pytest.raises(ExternalServiceError) as exc_info:
            await client.complete_json("hello")

        assert exc_info.value.service == "openai"
        assert client._client.chat.completions.create.await_count == 1

    @pytest.mark.asyncio
    async def test_complete_structured(self, client):
        """Test structured completion."""
        client._client.chat.completions.create.return_value = completion(
            json.dumps({"keywords": ["facepalm"], "topic": "coding", "reasoning": "oops"})
        )

        result = await client.complete_structured(
            "my build broke", schema=SearchStrategy, system_prompt="You pick GIFs."
        )

        assert isinstance(result, SearchStrategy)
        assert result.search_query == "facepalm coding"
        system = create_kwargs(client)["messages"][0]["content"]
        assert system.startswith("You pick GIFs.")
        assert '"keywords"' in system

    @pytest.mark.asyncio
    async def test_schema_violation_raises(self, client):
        """Test schema violation raises."""
        client._client.chat.completions.create.return_value = completion(
            json.dumps({"selectedIndex": "first", "reasoning": "r"})
        )

        with pytest.raises(ExternalServiceError) as exc_info:
            await client.complete_structured("pick", schema=Selection)

        assert "Selection" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_close(self, client):
        """Test closing releases the SDK client."""
        client._client.close = AsyncMock()

        await client.close()

        client._client.close.assert_awaited_once()
