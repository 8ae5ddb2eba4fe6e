from pydantic import BaseModel, Field, computed_field, model_validator


class ChatResponse(BaseModel):
    content: str = Field(..., min_length=1)
    provider_name: str
    model: str
    tokens_used: int | None = None
    latency_ms: int


class Attempt(BaseModel):
    provider_name: str
    success: bool
    error: str | None = None
    latency_ms: int | None = None

    @model_validator(mode="after")
    def _error_iff_failed(self) -> "Attempt":
        if self.success and self.error is not None:
            raise ValueError("successful attempt cannot carry an error")
        if not self.success and not self.error:
            raise ValueError("failed attempt must carry an error")
        return self


class RouterResult(ChatResponse):
    attempts: list[Attempt]

    @computed_field
    @property
    def total_attempts(self) -> int:
        return len(self.attempts)

    @model_validator(mode="after")
    def _last_attempt_is_winner(self) -> "RouterResult":
        if not self.attempts:
            raise ValueError("attempts must not be empty")
        last = self.attempts[-1]
        if not last.success or last.provider_name != self.provider_name:
            raise ValueError("last attempt must be the successful one")
        if any(a.success for a in self.attempts[:-1]):
            raise ValueError("only the last attempt may succeed")
        return self

    def summary(self) -> str:
        return format_attempts(self.attempts)


class ProviderStatus(BaseModel):
    key: str
    name: str
    configured: bool
    tier: str = "free"
    priority: int | None = None


def format_attempts(attempts: list[Attempt]) -> str:
    return ", ".join(
        f"{a.provider_name}: {'OK' if a.success else a.error}" for a in attempts
    )
