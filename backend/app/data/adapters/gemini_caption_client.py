from typing import Any, Dict, List, Optional

import requests

from app.core.utils.logger import get_logger
from app.domain.entities.caption_entity import CaptionPrompt
from app.domain.exceptions import EmptyResultError, UpstreamError

_logger = get_logger("gemini_caption_client")


def join_parts(parts: Any) -> str:
    """Concatenate the ``text`` of every part, ignoring parts without text."""
    if not isinstance(parts, list):
        return ""
    return "".join(p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)).strip()


def extract_gemini_text(data: Any) -> str:
    """Text of the first candidate of a generateContent response.

    All parts are joined; if that yields nothing, the first part alone is
    tried. Further candidates are ignored.
    """
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    text = join_parts(parts)
    if not text and isinstance(parts, list) and parts and isinstance(parts[0], dict):
        first_text = parts[0].get("text")
        text = first_text.strip() if isinstance(first_text, str) else ""
    return text


class GeminiCaptionClient:
    """Client for the Gemini generateContent REST endpoint."""

    provider = "gemini"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://generativelanguage.googleapis.com",
        model: str = "gemini-1.5-flash-latest",
        timeout: float = 60,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/v1/models/{self.model}:generateContent"

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }

    def build_payload(self, prompt: CaptionPrompt) -> Dict[str, Any]:
        # v1 has no systemInstruction field, so the instruction rides as the first part
        parts: List[Dict[str, str]] = [{"text": prompt.system}, {"text": prompt.user}]
        return {
            "contents": [{"parts": parts}],
            "generationConfig": {
                "temperature": prompt.temperature,
                "maxOutputTokens": prompt.max_output_tokens,
            },
        }

    def generate(self, prompt: CaptionPrompt) -> str:
        try:
            resp = self.session.post(
                self.endpoint,
                json=self.build_payload(prompt),
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UpstreamError(detail=f"Gemini request failed: {e}", provider=self.provider)

        if not resp.ok:
            raise UpstreamError(
                detail=f"Gemini API error {resp.status_code}: {resp.text or resp.reason}",
                provider=self.provider,
                status_code_upstream=resp.status_code,
            )
        try:
            data = resp.json()
        except ValueError:
            raise UpstreamError(
                detail=f"Gemini returned non-JSON body: {resp.text[:500]}",
                provider=self.provider,
                status_code_upstream=resp.status_code,
            )

        text = extract_gemini_text(data)
        if not text:
            feedback = data.get("promptFeedback") if isinstance(data, dict) else None
            reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
            detail = "Gemini returned no caption text"
            if reason:
                detail = f"{detail} (blockReason={reason})"
            raise EmptyResultError(detail=detail, provider=self.provider)
        _logger.debug("Gemini caption received (%d chars)", len(text))
        return text
