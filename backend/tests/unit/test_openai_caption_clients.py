"""Unit tests for the OpenAI caption clients (raw HTTP and SDK)."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import pytest
import requests
from openai import APIConnectionError, APIStatusError

from app.data.adapters.openai_caption_client import OpenAICaptionClient, extract_chat_text
from app.data.adapters.openai_sdk_caption_client import OpenAISdkCaptionClient
from app.domain.exceptions import EmptyResultError, UpstreamError
from app.domain.prompts.caption_prompt import build_caption_prompt


@pytest.fixture
def prompt():
    return build_caption_prompt("kedai kopi susu")


def _chat(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


# ==================== Raw HTTP ====================


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def openai_http(session):
    return OpenAICaptionClient(api_key="sk-test", session=session)


def test_http_request_shape(openai_http, session, prompt, response_factory):
    session.post.return_value = response_factory(json_data=_chat("Kopi! ☕"))

    assert openai_http.generate(prompt) == "Kopi! ☕"

    args, kwargs = session.post.call_args
    assert args[0] == "https://api.openai.com/v1/chat/completions"
    assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
    payload = kwargs["json"]
    assert payload["model"] == "gpt-4o-mini"
    assert payload["temperature"] == 0.7
    assert payload["max_tokens"] == 180
    assert [m["role"] for m in payload["messages"]] == ["system", "user"]
    assert payload["messages"][1]["content"] == prompt.user


def test_http_error_status_raises_upstream_error(openai_http, session, prompt, response_factory):
    session.post.return_value = response_factory(status_code=429, text="Rate limit reached for org-xyz")

    with pytest.raises(UpstreamError) as exc_info:
        openai_http.generate(prompt)

    assert exc_info.value.status_code_upstream == 429
    assert "org-xyz" in exc_info.value.detail
    assert "org-xyz" not in exc_info.value.public_message


def test_http_empty_content_raises_empty_result(openai_http, session, prompt, response_factory):
    session.post.return_value = response_factory(json_data=_chat(None))

    with pytest.raises(EmptyResultError):
        openai_http.generate(prompt)


def test_http_connection_error(openai_http, session, prompt):
    session.post.side_effect = requests.ConnectionError("refused")

    with pytest.raises(UpstreamError):
        openai_http.generate(prompt)


def test_extract_chat_text_variants():
    assert extract_chat_text(_chat("  halo  ")) == "halo"
    assert extract_chat_text(_chat([{"type": "text", "text": "a"}, {"type": "text", "text": "b"}])) == "ab"
    assert extract_chat_text({"choices": []}) == ""
    assert extract_chat_text({"choices": [_chat("satu")["choices"][0], _chat("dua")["choices"][0]]}) == "satu"


# ==================== SDK ====================


@pytest.fixture
def sdk_client():
    return MagicMock()


@pytest.fixture
def openai_sdk(sdk_client):
    return OpenAISdkCaptionClient(api_key="sk-test", model="gpt-4o", client=sdk_client)


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def test_sdk_passes_generation_parameters(openai_sdk, sdk_client, prompt):
    sdk_client.chat.completions.create.return_value = _completion("  Kopi susu gula aren ☕  ")

    assert openai_sdk.generate(prompt) == "Kopi susu gula aren ☕"

    kwargs = sdk_client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o"
    assert kwargs["temperature"] == 0.7
    assert kwargs["max_tokens"] == 180
    assert kwargs["messages"][0] == {"role": "system", "content": prompt.system}


def test_sdk_joins_list_content(openai_sdk, sdk_client, prompt):
    parts = [
        SimpleNamespace(type="text", text="Kopi pagi "),
        {"type": "text", "text": "☕ #kopi"},
        SimpleNamespace(type="refusal", refusal="no"),
    ]
    sdk_client.chat.completions.create.return_value = _completion(parts)

    assert openai_sdk.generate(prompt) == "Kopi pagi ☕ #kopi"


def test_sdk_list_content_without_text_is_empty_result(openai_sdk, sdk_client, prompt):
    sdk_client.chat.completions.create.return_value = _completion([SimpleNamespace(type="refusal")])

    with pytest.raises(EmptyResultError):
        openai_sdk.generate(prompt)


def test_sdk_empty_choices_raise_empty_result(openai_sdk, sdk_client, prompt):
    sdk_client.chat.completions.create.return_value = SimpleNamespace(choices=[])

    with pytest.raises(EmptyResultError):
        openai_sdk.generate(prompt)


def test_sdk_status_error_translated(openai_sdk, sdk_client, prompt):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    response = httpx.Response(500, request=request, text="upstream meltdown")
    sdk_client.chat.completions.create.side_effect = APIStatusError("server error", response=response, body=None)

    with pytest.raises(UpstreamError) as exc_info:
        openai_sdk.generate(prompt)

    assert exc_info.value.status_code_upstream == 500
    assert "upstream meltdown" in exc_info.value.detail


def test_sdk_connection_error_translated(openai_sdk, sdk_client, prompt):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    sdk_client.chat.completions.create.side_effect = APIConnectionError(request=request)

    with pytest.raises(UpstreamError):
        openai_sdk.generate(prompt)


def test_sdk_builds_versioned_base_url():
    client = OpenAISdkCaptionClient(api_key="sk-test", base_url="https://api.openai.com")

    assert str(client.client.base_url).rstrip("/") == "https://api.openai.com/v1"
    assert client.client.max_retries == 0
