import os
from dataclasses import dataclass

from dotenv import load_dotenv

from app.domain.exceptions import ConfigurationError


# Ensure .env values override any empty defaults from the container environment.
load_dotenv(dotenv_path=os.path.join(os.getcwd(), ".env"), override=True)


# Provider selector value -> environment variable holding its credential
PROVIDER_KEY_NAMES = {
    "gemini": "GEMINI_API_KEY",
    "openai": "OPENAI_API_KEY",
    "openai_sdk": "OPENAI_API_KEY",
}


@dataclass
class EnvironmentConfig:
    app_env: str = os.getenv("APP_ENV", "development")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Which adapter serves captions: 'gemini', 'openai' (raw HTTP) or 'openai_sdk'
    caption_provider: str = os.getenv("CAPTION_PROVIDER", "gemini")
    # Seconds to wait for the provider before giving up
    request_timeout: float = float(os.getenv("CAPTION_REQUEST_TIMEOUT", "60"))
    # Gemini integration
    gemini_api_key: str = os.getenv("GEMINI_API_KEY", "")
    gemini_api_base: str = os.getenv("GEMINI_API_BASE", "https://generativelanguage.googleapis.com")
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-1.5-flash-latest")
    # OpenAI integration (shared by the raw HTTP and SDK adapters)
    openai_api_key: str = os.getenv("OPENAI_API_KEY", "")
    openai_api_base: str = os.getenv("OPENAI_API_BASE", "https://api.openai.com")
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

    @property
    def provider(self) -> str:
        return self.caption_provider.strip().lower()

    def provider_key_name(self) -> str:
        try:
            return PROVIDER_KEY_NAMES[self.provider]
        except KeyError:
            raise ConfigurationError(
                detail=f"Unknown CAPTION_PROVIDER '{self.caption_provider}'",
                message="Server belum dikonfigurasi dengan CAPTION_PROVIDER yang valid.",
            )

    def provider_api_key(self) -> str:
        """Credential of the selected provider, empty string when unset."""
        if self.provider_key_name() == "GEMINI_API_KEY":
            return self.gemini_api_key
        return self.openai_api_key
