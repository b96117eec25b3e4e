from app.domain.entities.caption_entity import GeneratedCaption, GenerationRequest
from app.domain.exceptions import EmptyPromptError, EmptyResultError
from app.domain.prompts.caption_prompt import build_caption_prompt
from app.domain.repositories.caption_repository import CaptionRepository


class GenerateCaptionUseCase:
    """Use case for writing one marketing caption from a short prompt."""

    def __init__(self, repository: CaptionRepository) -> None:
        self._repository = repository

    def execute(self, request: GenerationRequest) -> GeneratedCaption:
        prompt = request.prompt.strip() if isinstance(request.prompt, str) else ""
        if not prompt:
            raise EmptyPromptError(detail="Prompt is empty after trimming")

        text = self._repository.generate(build_caption_prompt(prompt))
        caption = (text or "").strip()
        if not caption:
            raise EmptyResultError(detail="Provider returned no caption text")
        return GeneratedCaption(caption=caption)
