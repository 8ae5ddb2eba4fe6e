import httpx

from answer_router.core.config import Settings
from answer_router.core.providers import PROVIDERS
from answer_router.llms.openai_compat import OpenAICompatibleLLM

OPENROUTER_DEFAULT_REFERER = "https://aibreeds-demo.com"
OPENROUTER_DEFAULT_TITLE = "AI Pet Breeds Portal"


class OpenRouterClient(OpenAICompatibleLLM):
    """Paid fallback. OpenRouter asks callers to identify themselves via
    ``HTTP-Referer`` and ``X-Title``."""

    key = "openrouter"
    name = PROVIDERS["openrouter"]["display_name"]
    base_url = "https://openrouter.ai/api/v1/chat/completions"
    text_model = "openai/gpt-3.5-turbo"
    timeout = PROVIDERS["openrouter"]["timeout"]

    def __init__(
        self,
        api_key: str = "",
        http_client: httpx.AsyncClient | None = None,
        referer: str = OPENROUTER_DEFAULT_REFERER,
        title: str = OPENROUTER_DEFAULT_TITLE,
    ) -> None:
        super().__init__(api_key, http_client)
        self._referer = referer
        self._title = title

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: httpx.AsyncClient | None = None
    ) -> "OpenRouterClient":
        return cls(
            settings.api_key_for(cls.key),
            http_client,
            referer=settings.openrouter_referer,
            title=settings.openrouter_title,
        )

    def headers(self, api_key: str) -> dict[str, str]:
        headers = super().headers(api_key)
        if self._referer:
            headers["HTTP-Referer"] = self._referer
        if self._title:
            headers["X-Title"] = self._title
        return headers
