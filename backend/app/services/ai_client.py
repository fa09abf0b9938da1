"""Single-shot client for the hosted generative model."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import openai

from app.core.config import settings

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "GEMINI_API_KEY is not set in environment variables"


class AIClientError(Exception):
    """Base class for failures talking to the generative model."""


class AIConfigurationError(AIClientError):
    """Raised before any network activity when the credential is absent."""


class AITransportError(AIClientError):
    """Raised when the request itself fails (network fault, backend rejection)."""


@dataclass(frozen=True)
class AIClientConfig:
    api_key: Optional[str]
    model: str
    base_url: Optional[str] = None
    timeout: float = 60.0

    @classmethod
    def from_settings(cls) -> "AIClientConfig":
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.ai_model,
            base_url=settings.ai_base_url,
            timeout=settings.ai_timeout_seconds,
        )


class GenerativeClient:
    """One request, one response. No streaming and no retries."""

    def __init__(self, config: AIClientConfig):
        self.config = config

    def ensure_configured(self) -> None:
        if not self.config.api_key:
            raise AIConfigurationError(MISSING_KEY_MESSAGE)

    def generate_json(self, prompt: str, schema: Dict[str, Any], schema_name: str = "response") -> str:
        """Ask for output constrained to ``schema`` and return the raw text."""
        response_format = {
            "type": "json_schema",
            "json_schema": {"name": schema_name, "schema": schema},
        }
        return self._complete(prompt, response_format=response_format)

    def generate_text(self, prompt: str) -> str:
        return self._complete(prompt)

    def generate_with_attachment(self, prompt: str, data: str, mime_type: str) -> str:
        """Send base64 ``data`` inline next to ``prompt``.

        Images go as ``image_url`` parts; anything else as a ``file`` part.
        Both carry the payload as a data URI.
        """
        data_uri = f"data:{mime_type};base64,{data}"
        if mime_type.startswith("image/"):
            attachment: Dict[str, Any] = {"type": "image_url", "image_url": {"url": data_uri}}
        else:
            attachment = {"type": "file", "file": {"filename": "resource", "file_data": data_uri}}
        return self._complete([attachment, {"type": "text", "text": prompt}])

    def _complete(
        self,
        content: Union[str, List[Dict[str, Any]]],
        response_format: Optional[Dict[str, Any]] = None,
    ) -> str:
        self.ensure_configured()

        client = openai.OpenAI(
            api_key=self.config.api_key,
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            max_retries=0,
        )
        messages: List[Dict[str, Any]] = [{"role": "user", "content": content}]
        request: Dict[str, Any] = {"model": self.config.model, "messages": messages}
        if response_format:
            request["response_format"] = response_format

        try:
            completion = client.chat.completions.create(**request)
        except openai.OpenAIError as exc:
            logger.warning("Generative model request failed (model=%s): %s", self.config.model, exc)
            raise AITransportError(str(exc) or type(exc).__name__) from exc

        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""
