import httpx

from answer_router.core.config import Settings
from answer_router.llms.base import BaseLLM
from answer_router.llms.cohere_client import CohereClient
from answer_router.llms.groq_client import GroqClient
from answer_router.llms.huggingface_client import HuggingFaceClient
from answer_router.llms.openrouter_client import OpenRouterClient
from answer_router.llms.together_client import TogetherClient

# registry order is also the tie-break order for loose name matching
PROVIDER_CLASSES: tuple[type[BaseLLM], ...] = (
    GroqClient,
    TogetherClient,
    HuggingFaceClient,
    CohereClient,
    OpenRouterClient,
)


def get_client(
    provider_key: str,
    settings: Settings,
    http_client: httpx.AsyncClient | None = None,
) -> BaseLLM:
    for cls in PROVIDER_CLASSES:
        if cls.key == provider_key:
            return cls.from_settings(settings, http_client)
    raise ValueError(f"Unknown provider: {provider_key}")


def build_providers(
    settings: Settings,
    http_client: httpx.AsyncClient | None = None,
) -> list[BaseLLM]:
    return [get_client(cls.key, settings, http_client) for cls in PROVIDER_CLASSES]
