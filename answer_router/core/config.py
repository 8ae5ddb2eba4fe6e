import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

DEFAULT_PROVIDER_ORDER = "groq,together,huggingface,cohere,openrouter"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    groq_api_key: str = ""
    together_api_key: str = ""
    huggingface_api_key: str = ""
    cohere_api_key: str = ""
    openrouter_api_key: str = ""
    provider_order: str = DEFAULT_PROVIDER_ORDER
    provider_match_strict: bool = False
    # 0 disables the overall deadline; each provider still has its own timeout
    router_deadline_seconds: float = Field(0.0, ge=0)
    openrouter_referer: str = "https://aibreeds-demo.com"
    openrouter_title: str = "AI Pet Breeds Portal"
    log_level: str = "INFO"
    log_json: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        order = (os.getenv("PROVIDER_ORDER") or "").strip() or (
            os.getenv("LLM_PROVIDER_ORDER") or ""
        ).strip()
        return cls(
            groq_api_key=os.getenv("GROQ_API_KEY", ""),
            together_api_key=os.getenv("TOGETHER_API_KEY", ""),
            huggingface_api_key=os.getenv("HUGGINGFACE_API_KEY", ""),
            cohere_api_key=os.getenv("COHERE_API_KEY", ""),
            openrouter_api_key=os.getenv("OPENROUTER_API_KEY", ""),
            provider_order=order or DEFAULT_PROVIDER_ORDER,
            provider_match_strict=_env_flag("PROVIDER_MATCH_STRICT"),
            router_deadline_seconds=os.getenv("ROUTER_DEADLINE_SECONDS", "").strip() or 0.0,
            openrouter_referer=os.getenv("OPENROUTER_REFERER", "https://aibreeds-demo.com"),
            openrouter_title=os.getenv("OPENROUTER_TITLE", "AI Pet Breeds Portal"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_json=_env_flag("LOG_JSON"),
        )

    def api_key_for(self, provider_key: str) -> str:
        return getattr(self, f"{provider_key}_api_key", "") or ""

    def order_tokens(self) -> list[str]:
        return [t.strip().lower() for t in self.provider_order.split(",") if t.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
