# =============================================================================
# answer_router/llms/huggingface_client.py — Hugging Face Inference API
# =============================================================================
# The model is part of the URL. Replies come array-wrapped
# ([{"generated_text": ...}]) or object-wrapped ({"generated_text": ...});
# both are probed in a fixed order and the first non-empty text wins.
# Cold starts are slow, hence the longer timeout.
# =============================================================================

from typing import Any, Callable

from answer_router.core.providers import PROVIDERS
from answer_router.llms.base import BaseLLM, ParsedReply, as_int
from answer_router.schemas.request import ChatRequest

HF_INFERENCE_URL = "https://api-inference.huggingface.co/models"


def _first_item(data: Any) -> dict:
    if isinstance(data, list) and data and isinstance(data[0], dict):
        return data[0]
    return {}


def _as_object(data: Any) -> dict:
    return data if isinstance(data, dict) else {}


def _text(obj: dict, field: str) -> str:
    value = obj.get(field)
    return value if isinstance(value, str) else ""


_CONTENT_PROBES: tuple[Callable[[Any], str], ...] = (
    lambda d: _text(_first_item(d), "generated_text"),
    lambda d: _text(_first_item(d), "text"),
    lambda d: _text(_as_object(d), "generated_text"),
    lambda d: _text(_as_object(d), "text"),
)


def parse_inference_reply(data: Any) -> ParsedReply:
    content = ""
    for probe in _CONTENT_PROBES:
        content = probe(data).strip()
        if content:
            break
    usage = _as_object(data).get("usage") or {}
    return ParsedReply(content, as_int(usage.get("total_tokens")))


class HuggingFaceClient(BaseLLM):
    key = "huggingface"
    name = PROVIDERS["huggingface"]["display_name"]
    base_url = HF_INFERENCE_URL
    text_model = "meta-llama/Llama-3.2-3B-Instruct"
    timeout = PROVIDERS["huggingface"]["timeout"]

    def endpoint(self, model: str) -> str:
        return f"{self.base_url}/{model}"

    def build_payload(self, request: ChatRequest, model: str) -> dict[str, Any]:
        max_tokens, temperature = self.sampling(request)
        return {
            "inputs": {"messages": self.build_messages(request)},
            "parameters": {
                "max_new_tokens": max_tokens,
                "temperature": temperature,
            },
        }

    def parse_response(self, data: Any) -> ParsedReply:
        return parse_inference_reply(data)
