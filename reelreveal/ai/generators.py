# reelreveal/ai/generators.py
from __future__ import annotations
from typing import Any, Dict, List, Optional, Protocol
from abc import ABC, abstractmethod
import logging

import httpx
from ..config import Settings
from ..exceptions import ServerMisconfiguredError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

GENERATION_ERROR: str = "Failed to generate insights"


class TextGenerator(Protocol):
    """Single-shot prompt completion."""

    async def complete(self, prompt: str, max_output_tokens: int) -> str:
        ...


class _HTTPGenerator(ABC):
    """
    Shared transport for the REST completion providers.
    Subclasses build the request and pull the text out of the response.
    """
    provider: str = ""
    key_env: str = ""

    def __init__(
        self,
        api_key: Optional[str],
        api_base: str,
        model: str,
        timeout_s: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key: str = (api_key or "").strip()
        self.api_base: str = api_base.rstrip("/")
        self.model: str = model
        self.timeout: httpx.Timeout = httpx.Timeout(timeout_s)
        self.transport: Optional[httpx.AsyncBaseTransport] = transport

    @abstractmethod
    def _headers(self) -> Dict[str, str]:
        """Auth and content headers for the provider."""

    @abstractmethod
    def _url(self) -> str:
        """Completion endpoint."""

    @abstractmethod
    def _payload(self, prompt: str, max_output_tokens: int) -> Dict[str, Any]:
        """JSON request body."""

    @abstractmethod
    def _extract_text(self, data: Dict[str, Any]) -> str:
        """Generated text out of a decoded 2xx body."""

    async def complete(self, prompt: str, max_output_tokens: int) -> str:
        if not self.api_key:
            logger.error("%s missing", self.key_env)
            raise ServerMisconfiguredError(f"Missing {self.key_env} in server config")

        operation: str = f"{self.provider}.complete"
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                r: httpx.Response = await client.post(
                    self._url(), headers=self._headers(), json=self._payload(prompt, max_output_tokens)
                )
            except httpx.HTTPError as he:  # network / timeout / protocol
                logger.error("%s transport error: %s", self.provider, he, extra={"operation": operation})
                raise UpstreamUnavailableError(
                    GENERATION_ERROR, message=str(he) or type(he).__name__, status_code=500
                ) from he

        if not r.is_success:
            body: str = r.text
            logger.error(
                "%s non-2xx (%s)",
                self.provider,
                r.status_code,
                extra={"operation": operation, "upstream_status": r.status_code, "upstream_body": body[:300]},
            )
            raise UpstreamUnavailableError(
                GENERATION_ERROR,
                upstream_status=r.status_code,
                details=body or "No response body",
                status_code=500,
            )

        try:
            data = r.json()
        except ValueError as ve:
            raise UpstreamUnavailableError(
                GENERATION_ERROR, message=f"Invalid JSON from {self.provider}: {ve}", status_code=500
            ) from ve
        if not isinstance(data, dict):
            raise UpstreamUnavailableError(
                GENERATION_ERROR, message=f"Unexpected {self.provider} response shape", status_code=500
            )

        text: str = self._extract_text(data)
        if not text.strip():
            raise UpstreamUnavailableError(
                GENERATION_ERROR, message=f"{self.provider} returned no text", status_code=500
            )
        return text


class OpenAIResponsesGenerator(_HTTPGenerator):
    """OpenAI Responses API (`POST /responses`)."""
    provider = "openai"
    key_env = "OPENAI_API_KEY"

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}

    def _url(self) -> str:
        return f"{self.api_base}/responses"

    def _payload(self, prompt: str, max_output_tokens: int) -> Dict[str, Any]:
        return {"model": self.model, "input": prompt, "max_output_tokens": max_output_tokens}

    def _extract_text(self, data: Dict[str, Any]) -> str:
        # SDKs expose a flattened `output_text`; the raw REST body nests it
        if isinstance(data.get("output_text"), str):
            return data["output_text"]
        parts: List[str] = []
        for item in data.get("output") or []:
            if not isinstance(item, dict):
                continue
            for content in item.get("content") or []:
                if isinstance(content, dict) and content.get("type") == "output_text":
                    parts.append(str(content.get("text", "")))
        return "".join(parts)


class AnthropicMessagesGenerator(_HTTPGenerator):
    """Anthropic Messages API (`POST /messages`)."""
    provider = "anthropic"
    key_env = "ANTHROPIC_API_KEY"

    def __init__(self, *args: Any, version: str = "2023-06-01", **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.version: str = version

    def _headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": self.version,
            "Content-Type": "application/json",
        }

    def _url(self) -> str:
        return f"{self.api_base}/messages"

    def _payload(self, prompt: str, max_output_tokens: int) -> Dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": max_output_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }

    def _extract_text(self, data: Dict[str, Any]) -> str:
        parts: List[str] = [
            str(block.get("text", ""))
            for block in data.get("content") or []
            if isinstance(block, dict) and block.get("type") == "text"
        ]
        return "".join(parts)


class UnconfiguredGenerator:
    """
    Stand-in for an unknown GENERATION_PROVIDER.
    The error is raised on use, after request validation has run.
    """

    def __init__(self, error: str) -> None:
        self.error: str = error

    async def complete(self, prompt: str, max_output_tokens: int) -> str:
        logger.error(self.error)
        raise ServerMisconfiguredError(self.error)


def build_generator(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> TextGenerator:
    """
    Pick the completion provider named by GENERATION_PROVIDER.
    """
    provider: str = (settings.generation_provider or "openai").strip().lower()
    if provider == "openai":
        return OpenAIResponsesGenerator(
            settings.openai_api_key,
            settings.openai_api_base,
            settings.openai_model,
            settings.request_timeout_s,
            transport=transport,
        )
    if provider == "anthropic":
        return AnthropicMessagesGenerator(
            settings.anthropic_api_key,
            settings.anthropic_api_base,
            settings.anthropic_model,
            settings.request_timeout_s,
            transport=transport,
            version=settings.anthropic_version,
        )
    return UnconfiguredGenerator(
        f"Server misconfigured: unknown GENERATION_PROVIDER '{settings.generation_provider}'"
    )
