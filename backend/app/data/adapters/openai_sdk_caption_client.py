from typing import Optional

from openai import APIError, APIStatusError, OpenAI

from app.core.utils.logger import get_logger
from app.data.adapters.gemini_caption_client import join_parts
from app.data.adapters.openai_caption_client import build_messages
from app.domain.entities.caption_entity import CaptionPrompt
from app.domain.exceptions import EmptyResultError, UpstreamError

_logger = get_logger("openai_sdk_caption_client")


class OpenAISdkCaptionClient:
    """Caption client built on the official ``openai`` library.

    The underlying ``OpenAI`` instance is created once and reused by every
    request; it holds its own connection pool.
    """

    provider = "openai_sdk"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com",
        model: str = "gpt-4o-mini",
        timeout: float = 60,
        client: Optional[OpenAI] = None,
    ):
        self.model = model
        # The SDK expects the versioned root, e.g. https://api.openai.com/v1
        root = base_url.rstrip("/")
        if not root.endswith("/v1"):
            root = f"{root}/v1"
        self.client = client or OpenAI(api_key=api_key, base_url=root, timeout=timeout, max_retries=0)

    def generate(self, prompt: CaptionPrompt) -> str:
        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=build_messages(prompt),
                temperature=prompt.temperature,
                max_tokens=prompt.max_output_tokens,
            )
        except APIStatusError as e:
            raise UpstreamError(
                detail=f"OpenAI API error {e.status_code}: {e.response.text or e.message}",
                provider=self.provider,
                status_code_upstream=e.status_code,
            )
        except APIError as e:
            raise UpstreamError(detail=f"OpenAI request failed: {e}", provider=self.provider)

        choices = getattr(completion, "choices", None) or []
        content = choices[0].message.content if choices else None
        if isinstance(content, list):
            # Typed part objects are read by attribute, plain dicts pass through
            text = join_parts([p if isinstance(p, dict) else {"text": getattr(p, "text", None)} for p in content])
        else:
            text = content.strip() if isinstance(content, str) else ""
        if not text:
            raise EmptyResultError(detail="OpenAI returned no caption text", provider=self.provider)
        _logger.debug("OpenAI SDK caption received (%d chars)", len(text))
        return text
