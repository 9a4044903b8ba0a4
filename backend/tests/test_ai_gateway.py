from __future__ import annotations

import types

import pytest

from receipt_extractor.core.config import Settings
from receipt_extractor.core.errors import GatewayConfigurationError
from receipt_extractor.services.ai_gateway import OpenAIGateway, create_ai_gateway


class _FakeCompletions:
    def __init__(self, content):
        self.content = content
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        message = types.SimpleNamespace(content=self.content)
        return types.SimpleNamespace(choices=[types.SimpleNamespace(message=message)])


def _fake_client(content):
    completions = _FakeCompletions(content)
    client = types.SimpleNamespace(chat=types.SimpleNamespace(completions=completions))
    return client, completions


@pytest.mark.asyncio
async def test_infer_sends_prompt_and_data_url_and_returns_text():
    client, completions = _fake_client('{"total": 1}')
    gateway = OpenAIGateway(client, model="gpt-4o-mini")

    text = await gateway.infer("extract it", "QUJD", "image/png")

    assert text == '{"total": 1}'
    assert completions.kwargs["model"] == "gpt-4o-mini"
    content = completions.kwargs["messages"][0]["content"]
    assert content[0] == {"type": "text", "text": "extract it"}
    assert content[1]["image_url"]["url"] == "data:image/png;base64,QUJD"


@pytest.mark.asyncio
async def test_infer_returns_empty_string_when_model_sends_no_content():
    client, _ = _fake_client(None)
    assert await OpenAIGateway(client, model="m").infer("p", "QUJD", "image/jpeg") == ""


@pytest.mark.asyncio
async def test_infer_propagates_client_errors():
    class Boom:
        async def create(self, **kwargs):
            raise ConnectionError("network down")

    client = types.SimpleNamespace(chat=types.SimpleNamespace(completions=Boom()))
    with pytest.raises(ConnectionError):
        await OpenAIGateway(client, model="m").infer("p", "QUJD", "image/jpeg")


@pytest.mark.parametrize("key", [None, "", "   "])
def test_create_gateway_requires_api_key(key):
    with pytest.raises(GatewayConfigurationError):
        create_ai_gateway(Settings(OPENAI_API_KEY=key))


def test_create_gateway_disables_retries_and_uses_configured_model():
    gateway = create_ai_gateway(
        Settings(OPENAI_API_KEY="sk-test", EXTRACTION_MODEL="gpt-4o", AI_REQUEST_TIMEOUT_SECONDS=12.5)
    )
    assert gateway.model == "gpt-4o"
    assert gateway._client.max_retries == 0
    assert gateway._client.timeout == 12.5
