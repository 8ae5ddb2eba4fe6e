# =============================================================================
# answer_router/llms/base.py — provider contract shared by every backend client
# =============================================================================
# A provider turns a ChatRequest into exactly one HTTP POST and turns the
# backend's reply back into a ChatResponse. Subclasses only describe the wire
# format: endpoint, models, payload and reply shape.
# =============================================================================

import abc
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, NamedTuple

import httpx

from answer_router.core.config import Settings
from answer_router.core.errors import (
    BackendError,
    MalformedResponseError,
    ProviderTimeoutError,
    ProviderUnavailableError,
)
from answer_router.core.providers import PROVIDERS
from answer_router.core.security import mask_key, require_api_key
from answer_router.schemas.request import ChatRequest
from answer_router.schemas.response import ChatResponse

DEFAULT_MAX_TOKENS = 256
DEFAULT_TEMPERATURE = 0.7
ERROR_BODY_LIMIT = 500


class ParsedReply(NamedTuple):
    content: str
    tokens_used: int | None = None


class BaseLLM(abc.ABC):
    key: str = ""
    name: str = ""
    base_url: str = ""
    text_model: str = ""
    vision_model: str | None = None
    timeout: float = 10.0

    def __init__(self, api_key: str = "", http_client: httpx.AsyncClient | None = None) -> None:
        self._api_key = api_key or ""
        self._http_client = http_client

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: httpx.AsyncClient | None = None
    ) -> "BaseLLM":
        return cls(settings.api_key_for(cls.key), http_client)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} configured={self.is_configured()}>"

    @property
    def api_key_env(self) -> str:
        return PROVIDERS.get(self.key, {}).get("api_key_env", f"{self.key.upper()}_API_KEY")

    @property
    def masked_api_key(self) -> str:
        return mask_key(self._api_key)

    @property
    def supports_vision(self) -> bool:
        return self.vision_model is not None

    def is_configured(self) -> bool:
        return bool(self._api_key.strip())

    # --- request side ---

    def select_model(self, request: ChatRequest) -> str:
        if self.supports_vision and request.wants_vision:
            return self.vision_model
        return self.text_model

    def user_text(self, request: ChatRequest) -> str:
        ctx = request.context
        if ctx is None or not ctx.subject_name:
            return request.prompt
        if ctx.subject_category:
            return f"Question about {ctx.subject_name} ({ctx.subject_category}): {request.prompt}"
        return f"Question about {ctx.subject_name}: {request.prompt}"

    def build_messages(self, request: ChatRequest) -> list[dict[str, Any]]:
        messages: list[dict[str, Any]] = [
            {"role": "system", "content": request.effective_system_prompt},
        ]
        text = self.user_text(request)
        if self.supports_vision and request.wants_vision:
            messages.append(
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": text},
                        {"type": "image_url", "image_url": {"url": request.context.image_url}},
                    ],
                }
            )
        else:
            messages.append({"role": "user", "content": text})
        return messages

    def sampling(self, request: ChatRequest) -> tuple[int, float]:
        max_tokens = request.max_tokens if request.max_tokens is not None else DEFAULT_MAX_TOKENS
        temperature = request.temperature if request.temperature is not None else DEFAULT_TEMPERATURE
        return max_tokens, temperature

    def headers(self, api_key: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    def endpoint(self, model: str) -> str:
        return self.base_url

    @abc.abstractmethod
    def build_payload(self, request: ChatRequest, model: str) -> dict[str, Any]:
        """Backend-specific JSON body for one completion call."""

    # --- reply side ---

    @abc.abstractmethod
    def parse_response(self, data: Any) -> ParsedReply:
        """Pull the answer text (and token usage, if any) out of a 2xx body.

        Return an empty ``content`` when the body has no usable text;
        :meth:`call` turns that into :class:`MalformedResponseError`.
        """

    # --- transport ---

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        # an injected client is shared and owned by the caller
        if self._http_client is not None:
            yield self._http_client
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                yield client

    async def call(self, request: ChatRequest) -> ChatResponse:
        key = require_api_key(self._api_key, self.api_key_env)
        model = self.select_model(request)
        payload = self.build_payload(request, model)

        start = time.perf_counter()
        try:
            async with self._client() as client:
                r = await client.post(
                    self.endpoint(model),
                    headers=self.headers(key),
                    json=payload,
                    timeout=self.timeout,
                )
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(provider_name=self.name) from e
        except httpx.RequestError as e:
            raise ProviderUnavailableError(
                f"{self.name} unreachable: {e!s}", provider_name=self.name
            ) from e
        latency_ms = int((time.perf_counter() - start) * 1000)

        if not r.is_success:
            body = (r.text or "")[:ERROR_BODY_LIMIT]
            message = f"{self.name} API error: {r.status_code} {r.reason_phrase}"
            if body:
                message = f"{message} - {body}"
            raise BackendError(
                message,
                status_code=r.status_code,
                body=body,
                provider_name=self.name,
                latency_ms=latency_ms,
            )

        try:
            data = r.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"{self.name} returned a non-JSON body",
                provider_name=self.name,
                latency_ms=latency_ms,
            ) from e

        parsed = self.parse_response(data)
        content = (parsed.content or "").strip()
        if not content:
            raise MalformedResponseError(
                f"{self.name} returned no content",
                provider_name=self.name,
                latency_ms=latency_ms,
            )

        return ChatResponse(
            content=content,
            provider_name=self.name,
            model=model,
            tokens_used=parsed.tokens_used,
            latency_ms=latency_ms,
        )


def as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None
