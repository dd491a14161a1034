"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from enum import Enum

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, Response
from starlette.requests import ClientDisconnect

from food_detection.api.detection_models import DetectFoodResponse, ErrorResponse
from food_detection.app_logging import configure_logging
from food_detection.config import is_debug_environment
from food_detection.containers import AppContainer
from food_detection.errors import (
    ConfigurationError,
    DetectionError,
    InternalError,
    MalformedRequest,
    MethodNotAllowed,
    PayloadTooLarge,
)
from food_detection.services.multipart import extract_file_field

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

IMAGE_FIELD = "image"

# Room for boundaries and part headers on top of the image size cap.
MULTIPART_OVERHEAD_BYTES = 64 * 1024


class HandlerState(str, Enum):
    """Stages of a detection request."""

    RECEIVING_BODY = "receiving_body"
    DECODING = "decoding"
    CALLING_PROVIDER = "calling_provider"
    ASSEMBLING = "assembling"
    RESPONDING = "responding"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    async def detect_food(request: Request) -> Response:
        """Detect food items in an uploaded photo."""
        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)
        if request.method != "POST":
            return _error_response(
                MethodNotAllowed(), headers={"Allow": "POST, OPTIONS"}
            )

        state_container: AppContainer = request.app.state.container
        settings = state_container.settings
        service = state_container.detection_service
        state = HandlerState.RECEIVING_BODY
        try:
            if not settings.roboflow_api_key:
                raise ConfigurationError("ROBOFLOW_API_KEY not configured")
            body = await _read_body(
                request, settings.max_upload_bytes + MULTIPART_OVERHEAD_BYTES
            )
            state = HandlerState.DECODING
            image_bytes = extract_file_field(
                body,
                request.headers.get("content-type"),
                field_name=IMAGE_FIELD,
                max_bytes=settings.max_upload_bytes,
            )
            state = HandlerState.CALLING_PROVIDER
            raw = await service.predict(image_bytes)
            state = HandlerState.ASSEMBLING
            result = service.assemble(raw)
            state = HandlerState.RESPONDING
            payload = DetectFoodResponse.from_result(result)
            return JSONResponse(
                payload.model_dump(by_alias=True), headers=CORS_HEADERS
            )
        except DetectionError as exc:
            logger.warning(
                "Food detection failed while %s: %s (%s)",
                state.value,
                exc,
                exc.code,
                extra={"state": state.value, "code": exc.code},
            )
            return _error_response(exc)
        except Exception as exc:
            logger.exception(
                "Unexpected food detection failure while %s",
                state.value,
                extra={"state": state.value},
            )
            details = None
            if is_debug_environment(settings.environment):
                details = f"{type(exc).__name__}: {exc}".strip()
            return _error_response(InternalError(details=details))

    # No method filter: every verb reaches the handler, which owns the 405.
    app.add_route("/detect-food", detect_food)

    return app


async def _read_body(request: Request, limit: int) -> bytes:
    """Read the request body, refusing to buffer more than ``limit`` bytes."""
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        raise PayloadTooLarge(details=f"Request body is {declared} bytes")
    body = bytearray()
    try:
        async for chunk in request.stream():
            body.extend(chunk)
            if len(body) > limit:
                raise PayloadTooLarge(details=f"Request body exceeds {limit} bytes")
    except ClientDisconnect as exc:
        raise MalformedRequest(
            details="Client disconnected before the upload completed"
        ) from exc
    return bytes(body)


def _error_response(
    exc: DetectionError, headers: dict[str, str] | None = None
) -> JSONResponse:
    """Render a pipeline error as the JSON error envelope."""
    payload = ErrorResponse(
        error=exc.error,
        code=exc.code,
        details=exc.details,
        message=exc.message,
    )
    return JSONResponse(
        payload.model_dump(by_alias=True, exclude_none=True),
        status_code=exc.status_code,
        headers={**CORS_HEADERS, **(headers or {})},
    )
