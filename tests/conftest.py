import json
from typing import Callable

import httpx
import pytest

from answer_router.core.config import Settings

HOSTS = {
    "groq": "api.groq.com",
    "together": "api.together.xyz",
    "huggingface": "api-inference.huggingface.co",
    "cohere": "api.cohere.com",
    "openrouter": "openrouter.ai",
}

Handler = Callable[[httpx.Request], httpx.Response]


def chat_completion(content: str, total_tokens: int | None = 42) -> dict:
    body: dict = {"choices": [{"message": {"role": "assistant", "content": content}}]}
    if total_tokens is not None:
        body["usage"] = {"total_tokens": total_tokens}
    return body


def cohere_reply(text: str) -> dict:
    return {
        "message": {"role": "assistant", "content": [{"type": "text", "text": text}]},
        "usage": {"tokens": {"input_tokens": 10, "output_tokens": 5}},
    }


def ok(body) -> Handler:
    return lambda request: httpx.Response(200, json=body)


def status(code: int, text: str = "") -> Handler:
    return lambda request: httpx.Response(code, text=text)


def timeout() -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    return handler


def success_for(provider_key: str, text: str = "A Beagle is a small hound.") -> Handler:
    if provider_key == "cohere":
        return ok(cohere_reply(text))
    if provider_key == "huggingface":
        return ok([{"generated_text": text}])
    return ok(chat_completion(text))


class FakeBackends:
    """httpx transport handler that dispatches on host and records every request."""

    def __init__(self) -> None:
        self.handlers: dict[str, Handler] = {}
        self.calls: list[httpx.Request] = []

    def on(self, provider_key: str, handler: Handler) -> "FakeBackends":
        self.handlers[HOSTS[provider_key]] = handler
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        handler = self.handlers.get(request.url.host)
        if handler is None:
            return httpx.Response(404, text="no such backend")
        return handler(request)

    def hosts_called(self) -> list[str]:
        return [r.url.host for r in self.calls]

    def last_json(self) -> dict:
        return json.loads(self.calls[-1].content)


@pytest.fixture
def backends() -> FakeBackends:
    return FakeBackends()


@pytest.fixture
def http_client(backends) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(backends))


def make_settings(order: str | None = None, keys: tuple[str, ...] = (), **overrides) -> Settings:
    values = {f"{k}_api_key": f"test-{k}-key" for k in keys}
    if order is not None:
        values["provider_order"] = order
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def all_keys() -> tuple[str, ...]:
    return tuple(HOSTS)
