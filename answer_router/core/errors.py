"""Exceptions raised by providers and the router."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from answer_router.schemas.response import Attempt


class RouterError(Exception):
    """Base class for every error raised by this package."""


class CredentialMissingError(RouterError):
    """Raised when a provider is used without an API key."""


class ProviderError(RouterError):
    """A single backend call failed.

    ``latency_ms`` is set when the HTTP call completed before the failure was
    detected (bad status, unusable body) and left ``None`` otherwise.
    """

    def __init__(
        self,
        message: str,
        *,
        provider_name: str | None = None,
        latency_ms: int | None = None,
    ) -> None:
        super().__init__(message)
        self.provider_name = provider_name
        self.latency_ms = latency_ms


class ProviderTimeoutError(ProviderError):
    def __init__(self, *, provider_name: str | None = None) -> None:
        super().__init__("Timeout", provider_name=provider_name)


class ProviderUnavailableError(ProviderError):
    """Connection-level failure: DNS, refused connection, TLS, protocol."""


class BackendError(ProviderError):
    """The backend answered with a non-success HTTP status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        body: str = "",
        provider_name: str | None = None,
        latency_ms: int | None = None,
    ) -> None:
        super().__init__(message, provider_name=provider_name, latency_ms=latency_ms)
        self.status_code = status_code
        self.body = body


class MalformedResponseError(ProviderError):
    """The backend answered 2xx but no content could be extracted."""


class RoutingFailedError(RouterError):
    """Aggregate failure of a routed call.

    Carries every attempt made during the call (possibly none) and the last
    individual error, for logging.
    """

    def __init__(
        self,
        message: str,
        attempts: list[Attempt] | None = None,
        last_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.attempts: list[Attempt] = list(attempts or [])
        self.last_error = last_error


class NoProvidersConfiguredError(RoutingFailedError):
    def __init__(self) -> None:
        super().__init__(
            "No LLM providers configured. Please add API keys to your .env file."
        )


class AllProvidersFailedError(RoutingFailedError):
    pass
