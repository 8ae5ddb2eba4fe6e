from typing import Any

from answer_router.core.providers import PROVIDERS
from answer_router.llms.base import BaseLLM, ParsedReply, as_int
from answer_router.schemas.request import ChatRequest


def parse_cohere_reply(data: Any) -> ParsedReply:
    """Cohere v2 chat: ``message.content`` is a list of typed blocks.

    Falls back to the v1 top-level ``text`` field.
    """
    if not isinstance(data, dict):
        return ParsedReply("")
    message = data.get("message") or {}
    blocks = message.get("content") if isinstance(message, dict) else None
    content = ""
    if isinstance(blocks, list):
        content = "".join(
            b.get("text") or ""
            for b in blocks
            if isinstance(b, dict) and b.get("type", "text") == "text"
        )
    if not content.strip() and isinstance(data.get("text"), str):
        content = data["text"]

    tokens = (data.get("usage") or {}).get("tokens") or {}
    input_tokens = as_int(tokens.get("input_tokens"))
    output_tokens = as_int(tokens.get("output_tokens"))
    tokens_used = None
    if input_tokens is not None or output_tokens is not None:
        tokens_used = (input_tokens or 0) + (output_tokens or 0)
    return ParsedReply(content, tokens_used)


class CohereClient(BaseLLM):
    key = "cohere"
    name = PROVIDERS["cohere"]["display_name"]
    base_url = "https://api.cohere.com/v2/chat"
    text_model = "command-r-plus"
    timeout = PROVIDERS["cohere"]["timeout"]

    def build_payload(self, request: ChatRequest, model: str) -> dict[str, Any]:
        max_tokens, temperature = self.sampling(request)
        return {
            "model": model,
            "messages": self.build_messages(request),
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

    def parse_response(self, data: Any) -> ParsedReply:
        return parse_cohere_reply(data)
