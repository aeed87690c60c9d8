"""
Upstream Text Generation Client

Forwards a prompt to the configured OpenAI-compatible provider and returns the
provider's raw JSON body. Any transport or provider failure surfaces as
UpstreamError so callers can skip billing.
"""
import logging
from typing import Any

import httpx

from ..config import settings
from ..core.errors import UpstreamError

logger = logging.getLogger("uvicorn.error")


class TextGenerationClient:
    """Client for the upstream text-generation provider"""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        self.api_key = settings.upstream_api_key
        self.api_url = settings.upstream_api_url
        self.max_tokens = settings.upstream_max_tokens
        self.timeout = settings.upstream_timeout_seconds
        self._transport = transport

    def is_available(self) -> bool:
        """Check if API key is configured"""
        return bool(self.api_key)

    async def generate(self, prompt: str, model: str) -> Any:
        """
        Generate text for a prompt.

        Parameters:
            prompt: User prompt
            model: Upstream model name (e.g. "gpt-4")

        Returns:
            Decoded JSON response body from the provider

        Raises:
            UpstreamError: key missing, transport failure, non-2xx status or
                a body that is not JSON
        """
        if not self.is_available():
            logger.error("[upstream] UPSTREAM_API_KEY is missing")
            raise UpstreamError()

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": model,
            "prompt": prompt,
            "max_tokens": self.max_tokens,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(self.api_url, headers=headers, json=payload)
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPStatusError as e:
            logger.error("[upstream] provider returned %s for model=%s", e.response.status_code, model)
            raise UpstreamError() from e
        except httpx.HTTPError as e:
            logger.error("[upstream] request failed for model=%s: %r", model, e)
            raise UpstreamError() from e
        except ValueError as e:
            logger.error("[upstream] provider returned a non-JSON body for model=%s", model)
            raise UpstreamError() from e


def get_text_generation_client() -> TextGenerationClient:
    """FastAPI dependency; overridden in tests."""
    return TextGenerationClient()
