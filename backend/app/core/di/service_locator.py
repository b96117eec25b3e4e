from typing import Optional

from app.core.config.environment_config import EnvironmentConfig
from app.core.utils.logger import get_logger
from app.data.adapters.gemini_caption_client import GeminiCaptionClient
from app.data.adapters.openai_caption_client import OpenAICaptionClient
from app.data.adapters.openai_sdk_caption_client import OpenAISdkCaptionClient
from app.data.repositories.caption_repository_impl import CaptionClient, CaptionRepositoryImpl
from app.domain.exceptions import ConfigurationError
from app.domain.usecases.generate_caption_usecase import GenerateCaptionUseCase

_logger = get_logger("service_locator")


class ServiceLocator:
    _config: Optional[EnvironmentConfig] = None
    _caption_client: Optional[CaptionClient] = None
    _caption_repo: Optional[CaptionRepositoryImpl] = None
    _generate_caption_usecase: Optional[GenerateCaptionUseCase] = None

    @classmethod
    def config(cls) -> EnvironmentConfig:
        if cls._config is None:
            cls._config = EnvironmentConfig()
            _logger.info(
                "[config] CAPTION_PROVIDER=%s GEMINI_API_KEY=%s OPENAI_API_KEY=%s",
                cls._config.caption_provider,
                "SET" if cls._config.gemini_api_key else "MISSING",
                "SET" if cls._config.openai_api_key else "MISSING",
            )
        return cls._config

    @classmethod
    def caption_client(cls) -> CaptionClient:
        if cls._caption_client is None:
            cfg = cls.config()
            provider = cfg.provider
            if provider == "gemini":
                cls._caption_client = GeminiCaptionClient(
                    api_key=cfg.gemini_api_key,
                    base_url=cfg.gemini_api_base,
                    model=cfg.gemini_model,
                    timeout=cfg.request_timeout,
                )
            elif provider == "openai":
                cls._caption_client = OpenAICaptionClient(
                    api_key=cfg.openai_api_key,
                    base_url=cfg.openai_api_base,
                    model=cfg.openai_model,
                    timeout=cfg.request_timeout,
                )
            elif provider == "openai_sdk":
                cls._caption_client = OpenAISdkCaptionClient(
                    api_key=cfg.openai_api_key,
                    base_url=cfg.openai_api_base,
                    model=cfg.openai_model,
                    timeout=cfg.request_timeout,
                )
            else:
                raise ConfigurationError(detail=f"Unknown CAPTION_PROVIDER '{cfg.caption_provider}'")
        return cls._caption_client

    @classmethod
    def caption_repo(cls) -> CaptionRepositoryImpl:
        if cls._caption_repo is None:
            cls._caption_repo = CaptionRepositoryImpl(client=cls.caption_client())
        return cls._caption_repo

    @classmethod
    def generate_caption_usecase(cls) -> GenerateCaptionUseCase:
        if cls._generate_caption_usecase is None:
            cls._generate_caption_usecase = GenerateCaptionUseCase(repository=cls.caption_repo())
        return cls._generate_caption_usecase

    @classmethod
    def reset(cls) -> None:
        cls._config = None
        cls._caption_client = None
        cls._caption_repo = None
        cls._generate_caption_usecase = None
