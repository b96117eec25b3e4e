from dataclasses import dataclass


@dataclass
class GenerationRequest:
    prompt: str


@dataclass
class CaptionPrompt:
    """Everything a provider needs to produce one caption."""

    system: str
    user: str
    temperature: float
    max_output_tokens: int


@dataclass
class GeneratedCaption:
    caption: str
