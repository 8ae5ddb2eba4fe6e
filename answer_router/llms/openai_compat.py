# =============================================================================
# answer_router/llms/openai_compat.py — OpenAI-style chat completions backends
# =============================================================================
# Groq, Together AI and OpenRouter all accept {model, messages, max_tokens,
# temperature} and reply with choices[0].message.content + usage.total_tokens.
# =============================================================================

from typing import Any

from answer_router.llms.base import BaseLLM, ParsedReply, as_int
from answer_router.schemas.request import ChatRequest


def _message_text(message: dict) -> str:
    content = message.get("content")
    if isinstance(content, str):
        return content
    # some gateways return content as a list of typed parts
    if isinstance(content, list):
        return "".join(
            part.get("text") or ""
            for part in content
            if isinstance(part, dict) and part.get("type", "text") == "text"
        )
    return ""


def parse_chat_completion(data: Any) -> ParsedReply:
    if not isinstance(data, dict):
        return ParsedReply("")
    choices = data.get("choices") or []
    if not choices or not isinstance(choices[0], dict):
        return ParsedReply("")
    message = choices[0].get("message") or {}
    usage = data.get("usage") or {}
    return ParsedReply(_message_text(message), as_int(usage.get("total_tokens")))


class OpenAICompatibleLLM(BaseLLM):
    def build_payload(self, request: ChatRequest, model: str) -> dict[str, Any]:
        max_tokens, temperature = self.sampling(request)
        return {
            "model": model,
            "messages": self.build_messages(request),
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

    def parse_response(self, data: Any) -> ParsedReply:
        return parse_chat_completion(data)
