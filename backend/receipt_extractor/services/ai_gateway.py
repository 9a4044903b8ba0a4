"""Gateway to the external multi-modal model.

The gateway owns the single outbound call that sends the extraction
prompt together with the base64 encoded receipt image and returns the
model's raw text.  It does not interpret the text; parsing and
validation happen in the extraction service.

There is no retry: the OpenAI client is built with ``max_retries=0`` so
a transient failure surfaces immediately.  The model identifier comes
from ``settings.EXTRACTION_MODEL`` and cannot be chosen per request.

Build the default gateway with :func:`create_ai_gateway`, which fails
fast when no API key is configured.  The application calls it once at
startup.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from openai import AsyncOpenAI

from receipt_extractor.core.config import Settings, settings as default_settings
from receipt_extractor.core.errors import GatewayConfigurationError

logger = logging.getLogger(__name__)


class AIGateway(Protocol):
    async def infer(self, prompt: str, image_base64: str, mime_type: str) -> str: ...


class OpenAIGateway:
    """Vision extraction through the OpenAI chat completions API."""

    def __init__(self, client: AsyncOpenAI, model: str) -> None:
        self._client = client
        self.model = model

    @staticmethod
    def _build_messages(prompt: str, image_base64: str, mime_type: str) -> list[dict[str, Any]]:
        return [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {
                        "type": "image_url",
                        "image_url": {"url": f"data:{mime_type};base64,{image_base64}"},
                    },
                ],
            }
        ]

    async def infer(self, prompt: str, image_base64: str, mime_type: str) -> str:
        """Send prompt + image and return the model's text reply.

        SDK errors (network, auth, rate limit) propagate unchanged.
        """
        logger.info("[gateway] calling model=%s mime=%s payload_chars=%d", self.model, mime_type, len(image_base64))
        response = await self._client.chat.completions.create(
            model=self.model,
            messages=self._build_messages(prompt, image_base64, mime_type),
        )
        content = response.choices[0].message.content if response.choices else None
        text = content or ""
        logger.info("[gateway] model=%s reply_chars=%d", self.model, len(text))
        return text


def create_ai_gateway(config: Optional[Settings] = None) -> OpenAIGateway:
    """Build the OpenAI gateway from settings.

    Raises :class:`GatewayConfigurationError` when ``OPENAI_API_KEY`` is
    missing; the service cannot do anything useful without it.
    """
    config = config or default_settings
    api_key = (config.OPENAI_API_KEY or "").strip()
    if not api_key:
        raise GatewayConfigurationError("OPENAI_API_KEY environment variable is required")

    client_kwargs: dict[str, Any] = {"api_key": api_key, "max_retries": 0}
    if config.AI_REQUEST_TIMEOUT_SECONDS is not None:
        client_kwargs["timeout"] = float(config.AI_REQUEST_TIMEOUT_SECONDS)
    client = AsyncOpenAI(**client_kwargs)
    logger.info("[gateway] initialised model=%s", config.EXTRACTION_MODEL)
    return OpenAIGateway(client, model=config.EXTRACTION_MODEL)
