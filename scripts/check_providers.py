# =============================================================================
# scripts/check_providers.py — live smoke test of the provider cascade
# =============================================================================
# Usage: python scripts/check_providers.py ["question"] [--breed Beagle --category dog]
# Reads API keys and PROVIDER_ORDER from the environment / .env.
# =============================================================================

import argparse
import asyncio
import sys

from answer_router.core.config import get_settings
from answer_router.core.errors import RoutingFailedError
from answer_router.llms.router import LLMRouter
from answer_router.schemas.request import ChatRequest, RequestContext
from answer_router.schemas.response import format_attempts
from answer_router.services.answer_service import GENERIC_FAILURE_MESSAGE, answer
from answer_router.utils.logger import configure_logging


async def run(question: str, breed: str | None, category: str | None) -> int:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)
    router = LLMRouter(settings)

    print("1. Provider table ...")
    for s in router.get_provider_stats():
        state = f"priority {s.priority}" if s.configured else "not configured"
        print(f"   {s.name:<13} {s.tier:<5} {state}")
    if not router.has_providers():
        print("   No providers configured. Set e.g. GROQ_API_KEY in .env")
        return 1

    print(f"2. Asking: {question!r} ...")
    context = RequestContext(subject_name=breed, subject_category=category) if breed else None
    try:
        result = await answer(router, ChatRequest(prompt=question, context=context))
    except RoutingFailedError as e:
        print("   user sees:", GENERIC_FAILURE_MESSAGE)
        print("   FAILED:", str(e).splitlines()[0])
        print("   attempts:", format_attempts(e.attempts) or "none")
        return 1

    print(f"   OK: {result.provider_name} / {result.model} in {result.latency_ms}ms")
    print("   attempts:", result.summary())
    print("   answer (first 200 chars):", result.content[:200])
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Ask one question through the provider cascade.")
    parser.add_argument("question", nargs="?", default="How big is a Beagle?")
    parser.add_argument("--breed")
    parser.add_argument("--category")
    args = parser.parse_args()
    return asyncio.run(run(args.question, args.breed, args.category))


if __name__ == "__main__":
    sys.exit(main())
