from types import SimpleNamespace

import httpx
import openai
import pytest

from quizgen.core.constants import get_response_format
from quizgen.core.exceptions import TransportError
from quizgen.core.llm import LLMClient

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def _completion(content, refusal=None):
    message = SimpleNamespace(content=content, refusal=refusal)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def client():
    return LLMClient(provider="openai", model="gpt-4o-mini", timeout=5)


async def test_returns_raw_content_and_forwards_schema(client, monkeypatch):
    captured = {}

    async def create(**kwargs):
        captured.update(kwargs)
        return _completion('{"questions": []}')

    monkeypatch.setattr(client.client.chat.completions, "create", create)

    text = await client.generate("Generate questions about: graphs", "system", get_response_format())

    assert text == '{"questions": []}'
    assert captured["model"] == "gpt-4o-mini"
    assert captured["messages"][1] == {"role": "user", "content": "Generate questions about: graphs"}
    assert captured["response_format"]["type"] == "json_schema"


async def test_refusal_yields_empty_text(client, monkeypatch):
    async def create(**kwargs):
        return _completion(None, refusal="I can't help with that")

    monkeypatch.setattr(client.client.chat.completions, "create", create)

    assert await client.generate("prompt") == ""


@pytest.mark.parametrize("error, expected", [
    (openai.APITimeoutError(request=REQUEST), "timed out"),
    (openai.APIConnectionError(request=REQUEST), "Model request failed"),
    (
        openai.APIStatusError(
            "Service Unavailable",
            response=httpx.Response(503, request=REQUEST),
            body=None,
        ),
        "HTTP 503",
    ),
])
async def test_sdk_errors_become_transport_errors(client, monkeypatch, error, expected):
    async def create(**kwargs):
        raise error

    monkeypatch.setattr(client.client.chat.completions, "create", create)

    with pytest.raises(TransportError, match=expected) as exc_info:
        await client.generate("prompt")

    assert exc_info.value.__cause__ is error
