"""Roboflow hosted inference client."""

import asyncio
import base64
import logging
from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from food_detection.domain.detection import ProviderResult
from food_detection.errors import (
    ConfigurationError,
    UpstreamError,
    UpstreamTimeout,
    UpstreamUnreachable,
)
from food_detection.services.detection import DetectionClient

CONFIDENCE_PERCENT = 30
OVERLAP_PERCENT = 30

_logger = logging.getLogger(__name__)


@dataclass
class HttpxRoboflowClient(DetectionClient):
    """Detection client backed by Roboflow's hosted object-detection API."""

    api_key: str | None
    model: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 30.0

    @classmethod
    def create(
        cls,
        api_key: str | None,
        model: str,
        base_url: str,
        timeout_seconds: float = 30.0,
    ) -> "HttpxRoboflowClient":
        """Create a Roboflow client with a managed httpx session."""
        return cls(
            api_key=api_key,
            model=model,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def predict(self, image_bytes: bytes) -> ProviderResult:
        """Send a base64-encoded image for inference.

        A single attempt is made. The whole call, including reading the body,
        is bounded by ``timeout_seconds``.
        """
        if not self.api_key:
            raise ConfigurationError("ROBOFLOW_API_KEY not configured")
        url = f"{self.base_url.rstrip('/')}/{self.model.strip('/')}"
        encoded = base64.b64encode(image_bytes).decode("ascii")
        _logger.info(
            "Sending %s bytes to Roboflow model %s", len(image_bytes), self.model
        )
        try:
            async with asyncio.timeout(self.timeout_seconds):
                response = await self.http_client.post(
                    url,
                    params={
                        "api_key": self.api_key,
                        "confidence": CONFIDENCE_PERCENT,
                        "overlap": OVERLAP_PERCENT,
                    },
                    content=encoded,
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                    timeout=self.timeout_seconds,
                )
                response.raise_for_status()
        except (httpx.TimeoutException, TimeoutError) as exc:
            raise UpstreamTimeout(
                f"No response from Roboflow within {self.timeout_seconds:g} seconds"
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                exc.response.status_code,
                exc.response.reason_phrase,
                details=_error_body(exc.response),
            ) from exc
        except httpx.TransportError as exc:
            raise UpstreamUnreachable(f"Could not reach Roboflow: {exc}") from exc

        try:
            result = ProviderResult.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise UpstreamError(
                502, "Bad Gateway", details="Roboflow returned an unreadable payload"
            ) from exc
        _logger.info("Detected %s objects", len(result.predictions))
        return result

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _error_body(response: httpx.Response) -> str | None:
    """Return a short excerpt of an upstream error body, if any."""
    text = response.text.strip()
    if not text:
        return None
    return text[:500]
