from typing import Any, Dict, Optional

import requests

from app.core.utils.logger import get_logger
from app.data.adapters.gemini_caption_client import join_parts
from app.domain.entities.caption_entity import CaptionPrompt
from app.domain.exceptions import EmptyResultError, UpstreamError

_logger = get_logger("openai_caption_client")


def build_messages(prompt: CaptionPrompt) -> list:
    return [
        {"role": "system", "content": prompt.system},
        {"role": "user", "content": prompt.user},
    ]


def extract_chat_text(data: Any) -> str:
    """Text of ``choices[0].message.content`` from a chat/completions response.

    Content may be a plain string or a list of ``{"type": "text", "text": ...}``
    parts; the latter are joined.
    """
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if isinstance(content, str):
        return content.strip()
    return join_parts(content)


class OpenAICaptionClient:
    """Plain HTTP client for an OpenAI-compatible chat/completions endpoint."""

    provider = "openai"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com",
        model: str = "gpt-4o-mini",
        timeout: float = 60,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.endpoint_path = "/v1/chat/completions"
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def build_payload(self, prompt: CaptionPrompt) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": build_messages(prompt),
            "temperature": prompt.temperature,
            "max_tokens": prompt.max_output_tokens,
        }

    def generate(self, prompt: CaptionPrompt) -> str:
        url = f"{self.base_url}{self.endpoint_path}"
        try:
            resp = self.session.post(url, json=self.build_payload(prompt), headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamError(detail=f"OpenAI request failed: {e}", provider=self.provider)

        if not resp.ok:
            raise UpstreamError(
                detail=f"OpenAI API error {resp.status_code}: {resp.text or resp.reason}",
                provider=self.provider,
                status_code_upstream=resp.status_code,
            )
        try:
            data = resp.json()
        except ValueError:
            raise UpstreamError(
                detail=f"OpenAI returned non-JSON body: {resp.text[:500]}",
                provider=self.provider,
                status_code_upstream=resp.status_code,
            )

        text = extract_chat_text(data)
        if not text:
            raise EmptyResultError(detail="OpenAI returned no caption text", provider=self.provider)
        _logger.debug("OpenAI caption received (%d chars)", len(text))
        return text
