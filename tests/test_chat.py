"""Tests for the medical-information chatbot."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from openai import APIConnectionError

from app.features.chat.service import MEDICAL_SYSTEM_PROMPT, ChatService
from app.shared.exceptions import UpstreamException


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def stub_client() -> MagicMock:
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=completion("Drink plenty of fluids."))
    return client


class TestChatService:
    async def test_reply(self, settings, stub_client):
        service = ChatService(settings, client=stub_client)

        answer = await service.reply("How do I treat a cold?")

        assert answer == "Drink plenty of fluids."
        kwargs = stub_client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == settings.CHAT_MODEL
        assert kwargs["max_tokens"] == 400
        assert kwargs["messages"][0] == {"role": "system", "content": MEDICAL_SYSTEM_PROMPT}
        assert kwargs["messages"][-1] == {"role": "user", "content": "How do I treat a cold?"}

    def test_format_instruction_goes_into_system_prompt(self):
        messages = ChatService.build_messages("What is anemia?", "bullet points")

        assert messages[0]["content"].startswith(MEDICAL_SYSTEM_PROMPT)
        assert "bullet points" in messages[0]["content"]
        assert messages[1]["content"] == "What is anemia?"

    async def test_unconfigured_provider(self, settings):
        service = ChatService(settings)

        with pytest.raises(UpstreamException):
            await service.reply("Hello")

    async def test_provider_error(self, settings, stub_client):
        request = httpx.Request("POST", "https://example.invalid/chat/completions")
        stub_client.chat.completions.create.side_effect = APIConnectionError(request=request)
        service = ChatService(settings, client=stub_client)

        with pytest.raises(UpstreamException) as exc_info:
            await service.reply("Hello")
        assert exc_info.value.status_code == 502

    async def test_empty_completion(self, settings, stub_client):
        stub_client.chat.completions.create.return_value = completion(None)
        service = ChatService(settings, client=stub_client)

        with pytest.raises(UpstreamException):
            await service.reply("Hello")


class TestChatRoute:
    async def test_chat(self, client, chat_client):
        chat_client.chat.completions.create.return_value = completion("See a doctor if it persists.")

        response = await client.post("/api/chat", json={"message": "I have a headache"})

        assert response.status_code == 200
        assert response.json() == {"response": "See a doctor if it persists."}

    async def test_chat_upstream_failure(self, client, chat_client):
        request = httpx.Request("POST", "https://example.invalid/chat/completions")
        chat_client.chat.completions.create.side_effect = APIConnectionError(request=request)

        response = await client.post("/api/chat", json={"message": "I have a headache"})

        assert response.status_code == 502
        assert response.json()["error"] == "upstream_error"

    async def test_empty_message(self, client):
        response = await client.post("/api/chat", json={"message": ""})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
