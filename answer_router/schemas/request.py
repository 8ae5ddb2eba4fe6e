from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful assistant for pet breed information. Answer concisely and accurately."
)


class RequestContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    subject_name: str | None = None
    subject_category: str | None = None  # e.g. "dog" / "cat"
    image_url: str | None = None
    use_vision: bool = False

    @property
    def wants_vision(self) -> bool:
        return bool(self.use_vision and self.image_url)


class ChatRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    prompt: str = Field(..., min_length=1)
    system_prompt: str | None = None
    max_tokens: int | None = Field(None, gt=0)
    temperature: float | None = Field(None, ge=0.0, le=2.0)
    context: RequestContext | None = None

    @field_validator("prompt")
    @classmethod
    def _prompt_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("prompt must not be blank")
        return v

    @property
    def effective_system_prompt(self) -> str:
        return self.system_prompt or DEFAULT_SYSTEM_PROMPT

    @property
    def wants_vision(self) -> bool:
        return self.context is not None and self.context.wants_vision
