from typing import Protocol

from app.core.utils.logger import get_logger
from app.domain.entities.caption_entity import CaptionPrompt
from app.domain.repositories.caption_repository import CaptionRepository

_logger = get_logger("caption_repository")


class CaptionClient(Protocol):
    provider: str

    def generate(self, prompt: CaptionPrompt) -> str:
        ...


class CaptionRepositoryImpl(CaptionRepository):
    """Implementation of CaptionRepository over any provider client."""

    def __init__(self, client: CaptionClient) -> None:
        self._client = client

    @property
    def provider(self) -> str:
        return self._client.provider

    def generate(self, prompt: CaptionPrompt) -> str:
        _logger.info("Requesting caption from provider=%s", self.provider)
        return self._client.generate(prompt)
