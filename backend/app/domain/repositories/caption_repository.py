from abc import ABC, abstractmethod

from app.domain.entities.caption_entity import CaptionPrompt


class CaptionRepository(ABC):
    """Interface for any text-generation provider able to write captions."""

    @abstractmethod
    def generate(self, prompt: CaptionPrompt) -> str:
        """
        Generate caption text for a fully built prompt.

        Args:
            prompt: System/user messages plus generation parameters.

        Returns:
            Text of the first candidate, possibly empty.

        Raises:
            UpstreamError: The provider call failed.
        """
        raise NotImplementedError
