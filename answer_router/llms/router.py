# =============================================================================
# answer_router/llms/router.py — cascading fallback across configured providers
# =============================================================================
# The attempt sequence is resolved once, at construction, from PROVIDER_ORDER
# and the credentials present. route() walks it strictly in order, one call in
# flight, and returns on the first success. Nothing is remembered across calls.
#
# Worst-case latency of one route() is the sum of every provider's timeout
# (10+20+20+10+10 = 70s with the default order) unless ROUTER_DEADLINE_SECONDS
# caps the whole cascade.
# =============================================================================

import asyncio
import re
import time
from typing import Iterable, Sequence

import httpx

from answer_router.core.config import Settings, get_settings
from answer_router.core.errors import AllProvidersFailedError, NoProvidersConfiguredError
from answer_router.core.providers import PROVIDERS
from answer_router.llms.base import BaseLLM
from answer_router.llms.registry import build_providers
from answer_router.schemas.request import ChatRequest
from answer_router.schemas.response import Attempt, ProviderStatus, RouterResult, format_attempts
from answer_router.utils.logger import logger

DEADLINE_EXCEEDED = "Router deadline exceeded"

_WHITESPACE = re.compile(r"\s+")


def normalize_name(name: str) -> str:
    return _WHITESPACE.sub("", name.lower())


def match_provider(
    token: str,
    providers: Sequence[BaseLLM],
    strict: bool = False,
) -> BaseLLM | None:
    """Find the provider a configured order token refers to.

    Loose matching (the default) accepts token-in-name or name-in-token after
    lowercasing and dropping whitespace, so "together", "huggingface" and
    " Hugging Face " all resolve. Strict matching wants the whole name or key.
    The first provider in registry order wins.
    """
    wanted = normalize_name(token)
    if not wanted:
        return None
    for p in providers:
        name = normalize_name(p.name)
        if strict:
            if wanted in (name, p.key):
                return p
        elif wanted in name or name in wanted:
            return p
    return None


def resolve_order(
    tokens: Iterable[str],
    providers: Sequence[BaseLLM],
    strict: bool = False,
) -> list[BaseLLM]:
    resolved: list[BaseLLM] = []
    for token in tokens:
        provider = match_provider(token, providers, strict=strict)
        if provider is None:
            logger.warning("provider_unknown", extra={"token": token})
            continue
        if not provider.is_configured():
            logger.info("provider_unconfigured", extra={"provider": provider.name})
            continue
        if provider in resolved:
            continue
        resolved.append(provider)
    return resolved


class LLMRouter:
    """Tries each configured provider in priority order until one answers.

    Usage::

        router = LLMRouter()
        result = await router.route(ChatRequest(prompt="How big is a Beagle?"))
        result.content, result.provider_name, result.attempts
    """

    def __init__(
        self,
        settings: Settings | None = None,
        providers: Sequence[BaseLLM] | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._all_providers: tuple[BaseLLM, ...] = tuple(
            providers if providers is not None else build_providers(self._settings, http_client)
        )
        self._order = self._settings.order_tokens()
        self._providers: tuple[BaseLLM, ...] = tuple(
            resolve_order(
                self._order,
                self._all_providers,
                strict=self._settings.provider_match_strict,
            )
        )
        deadline = self._settings.router_deadline_seconds
        self._deadline = deadline if deadline > 0 else None

        if not self._providers:
            logger.warning(
                "router_no_providers",
                extra={"hint": "No LLM providers configured. Add API keys to .env"},
            )
        else:
            logger.info(
                "router_initialized",
                extra={
                    "providers": [p.name for p in self._providers],
                    "fallback": self._providers[-1].name,
                },
            )
            for p in self._providers:
                logger.debug(
                    "provider_configured",
                    extra={"provider": p.name, "api_key": p.masked_api_key},
                )

    @property
    def providers(self) -> tuple[BaseLLM, ...]:
        return self._providers

    def get_configured_providers(self) -> list[str]:
        return [p.name for p in self._providers]

    def has_providers(self) -> bool:
        return bool(self._providers)

    def get_provider_stats(self) -> list[ProviderStatus]:
        stats: list[ProviderStatus] = []
        for key, meta in PROVIDERS.items():
            priority = None
            for i, p in enumerate(self._providers, start=1):
                if p.key == key:
                    priority = i
                    break
            stats.append(
                ProviderStatus(
                    key=key,
                    name=meta["display_name"],
                    configured=priority is not None,
                    tier=meta.get("tier", "free"),
                    priority=priority,
                )
            )
        return stats

    async def route(self, request: ChatRequest) -> RouterResult:
        if not self._providers:
            raise NoProvidersConfiguredError()

        attempts: list[Attempt] = []
        last_error: BaseException | None = None
        started = time.monotonic()

        for provider in self._providers:
            timeout = provider.timeout
            cut_by_deadline = False
            if self._deadline is not None:
                remaining = self._deadline - (time.monotonic() - started)
                if remaining <= 0:
                    attempts.append(
                        Attempt(provider_name=provider.name, success=False, error=DEADLINE_EXCEEDED)
                    )
                    continue
                if remaining < timeout:
                    timeout = remaining
                    cut_by_deadline = True

            logger.info("llm_attempt", extra={"provider": provider.name})
            try:
                response = await asyncio.wait_for(provider.call(request), timeout=timeout)
            except asyncio.TimeoutError as e:
                error = DEADLINE_EXCEEDED if cut_by_deadline else "Timeout"
                last_error = e
                attempts.append(Attempt(provider_name=provider.name, success=False, error=error))
                logger.warning("provider_failed", extra={"provider": provider.name, "error": error})
                continue
            except Exception as e:
                error = str(e) or type(e).__name__
                last_error = e
                attempts.append(
                    Attempt(
                        provider_name=provider.name,
                        success=False,
                        error=error,
                        latency_ms=getattr(e, "latency_ms", None),
                    )
                )
                logger.warning("provider_failed", extra={"provider": provider.name, "error": error})
                continue

            attempts.append(
                Attempt(provider_name=provider.name, success=True, latency_ms=response.latency_ms)
            )
            logger.info(
                "llm_used",
                extra={
                    "provider": provider.name,
                    "model": response.model,
                    "latency_ms": response.latency_ms,
                    "attempts": len(attempts),
                },
            )
            return RouterResult(**response.model_dump(), attempts=attempts)

        last_message = attempts[-1].error or "Unknown error"
        logger.error("all_providers_failed", extra={"attempts": format_attempts(attempts)})
        raise AllProvidersFailedError(
            f"All LLM providers failed. Last error: {last_message}\n"
            f"Attempts: {format_attempts(attempts)}",
            attempts=attempts,
            last_error=last_error,
        )
