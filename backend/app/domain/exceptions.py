"""Errors raised while turning a prompt into a caption.

Every error carries two texts: ``message`` is short, sanitized and safe to
return to the caller, ``detail`` is the full story and only goes to the
server log. The presentation layer maps ``status_code`` and ``headers`` onto
the HTTP response.
"""

from typing import Dict, Optional


MAX_PUBLIC_MESSAGE_LENGTH = 200


class CaptionError(Exception):
    status_code: int = 500
    default_message: str = "Terjadi kesalahan saat membuat caption."

    def __init__(
        self,
        message: Optional[str] = None,
        detail: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.message = message or self.default_message
        self.detail = detail or self.message
        self.headers = headers or {}
        super().__init__(self.detail)

    @property
    def public_message(self) -> str:
        return self.message[:MAX_PUBLIC_MESSAGE_LENGTH]


class ClientRequestError(CaptionError):
    """Problem with the caller's request. Not a server fault."""

    status_code = 400


class MethodNotAllowedError(ClientRequestError):
    status_code = 405
    default_message = "Method not allowed. Gunakan POST."

    def __init__(self, method: str) -> None:
        super().__init__(detail=f"Rejected {method} request", headers={"Allow": "POST"})


class InvalidJsonError(ClientRequestError):
    default_message = "Body harus berupa JSON valid."


class EmptyPromptError(ClientRequestError):
    default_message = "Isi prompt terlebih dahulu."


class ConfigurationError(CaptionError):
    """Deployment is missing something the handler needs, e.g. a credential."""

    default_message = "Server belum dikonfigurasi."


class UpstreamError(CaptionError):
    """The provider call failed or answered with a non-success status.

    Attributes:
        provider: Adapter that made the call.
        status_code_upstream: HTTP status reported by the provider, if any.
    """

    default_message = "Gagal membuat caption dari layanan AI. Coba lagi nanti."

    def __init__(
        self,
        detail: str,
        provider: Optional[str] = None,
        status_code_upstream: Optional[int] = None,
        message: Optional[str] = None,
    ) -> None:
        self.provider = provider
        self.status_code_upstream = status_code_upstream
        super().__init__(message=message, detail=detail)


class EmptyResultError(UpstreamError):
    default_message = "Caption kosong dari model."
