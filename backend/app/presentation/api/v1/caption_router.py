import json
from typing import Any, Union

from fastapi import APIRouter, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.di.service_locator import ServiceLocator
from app.core.utils.logger import get_logger
from app.domain.entities.caption_entity import GenerationRequest
from app.domain.exceptions import (
    CaptionError,
    ClientRequestError,
    ConfigurationError,
    EmptyPromptError,
    InvalidJsonError,
    MethodNotAllowedError,
)


router = APIRouter(tags=["caption"])
logger = get_logger("caption_router")

GENERATE_PATHS = ("/api/generate", "/api/v1/caption/generate")


class CaptionRequest(BaseModel):
    prompt: str = Field(..., description="Deskripsi produk atau promo UMKM")


class CaptionResponse(BaseModel):
    caption: str


class ErrorResponse(BaseModel):
    error: str


def parse_body(body: Union[bytes, str, dict, None]) -> Any:
    """Decode a request body; an empty body counts as ``{}``."""
    if isinstance(body, dict):
        return body
    if body is None or not body.strip():
        return {}
    try:
        return json.loads(body)
    except ValueError as e:
        raise InvalidJsonError(detail=f"Malformed JSON body: {e}")


def extract_prompt(body: Any) -> str:
    prompt = body.get("prompt") if isinstance(body, dict) else None
    if not isinstance(prompt, str) or not prompt.strip():
        raise EmptyPromptError(detail=f"Missing or blank prompt ({type(prompt).__name__})")
    return prompt


def _error_response(err: CaptionError) -> JSONResponse:
    return JSONResponse(
        status_code=err.status_code,
        content={"error": err.public_message},
        headers=err.headers or None,
    )


def _check_configured() -> None:
    cfg = ServiceLocator.config()
    key_name = cfg.provider_key_name()
    if not cfg.provider_api_key():
        raise ConfigurationError(
            message=f"Server belum dikonfigurasi dengan {key_name}.",
            detail=f"{key_name} is not set for provider '{cfg.provider}'",
        )


async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    """Answer routing 405s on the caption paths with our own error body.

    Only POST is registered on these paths, so routing rejects every other
    method, whatever its name.
    """
    if exc.status_code == 405 and request.url.path in GENERATE_PATHS:
        err = MethodNotAllowedError(request.method)
        logger.info("Rejected caption request: %s", err.detail)
        return _error_response(err)
    return await http_exception_handler(request, exc)


@router.post(
    GENERATE_PATHS[0],
    response_model=CaptionResponse,
    responses={400: {"model": ErrorResponse}, 405: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    openapi_extra={"requestBody": {"content": {"application/json": {"schema": CaptionRequest.model_json_schema()}}}},
)
@router.post(GENERATE_PATHS[1], response_model=CaptionResponse, include_in_schema=False)
async def generate_caption(request: Request):
    try:
        _check_configured()
        prompt = extract_prompt(parse_body(await request.body()))
        usecase = ServiceLocator.generate_caption_usecase()
        result = await run_in_threadpool(usecase.execute, GenerationRequest(prompt=prompt))
    except ClientRequestError as e:
        logger.info("Rejected caption request: %s", e.detail)
        return _error_response(e)
    except ConfigurationError as e:
        logger.error("Caption service misconfigured: %s", e.detail)
        return _error_response(e)
    except CaptionError as e:
        logger.error("Error generate caption: %s", e.detail)
        return _error_response(e)
    except Exception:
        logger.exception("Unexpected error generating caption")
        return _error_response(CaptionError())
    return CaptionResponse(caption=result.caption)
