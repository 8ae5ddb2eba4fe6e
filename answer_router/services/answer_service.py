from answer_router.core.errors import RoutingFailedError
from answer_router.llms.router import LLMRouter
from answer_router.schemas.request import ChatRequest
from answer_router.schemas.response import RouterResult, format_attempts
from answer_router.utils.logger import logger

GENERIC_FAILURE_MESSAGE = "Sorry, I could not get an answer right now. Please try again later."


async def answer(router: LLMRouter, request: ChatRequest) -> RouterResult:
    """Single entry point for the HTTP layer.

    Returns the routed result or re-raises the router's aggregate failure after
    logging the attempt history. Callers should show ``GENERIC_FAILURE_MESSAGE``
    to end users rather than the failure text.
    """
    try:
        result = await router.route(request)
    except RoutingFailedError as e:
        logger.error(
            "answer_failed",
            extra={
                "error_type": type(e).__name__,
                "attempts": format_attempts(e.attempts),
                "total_attempts": len(e.attempts),
            },
        )
        raise
    logger.info(
        "answer_served",
        extra={
            "provider": result.provider_name,
            "model": result.model,
            "tokens_used": result.tokens_used,
            "latency_ms": result.latency_ms,
            "attempts": result.summary(),
            "total_attempts": result.total_attempts,
        },
    )
    return result
