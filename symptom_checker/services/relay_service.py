"""
Relay: answer a symptom query with search → prompt → inference (→ optional log).

Responsibility: The only component with control flow. Validates input and config
before any external call, degrades on search failure, aborts on inference failure,
and hands the finished exchange to a log dispatcher without waiting on it.
Called by the API; no HTTP types here.
"""

import logging
from collections.abc import Callable
from datetime import date, datetime, timezone

from symptom_checker.agent.llm import complete
from symptom_checker.agent.prompts import build_inference_request
from symptom_checker.core.config import Settings
from symptom_checker.core.errors import ConfigurationError, MessageRequiredError
from symptom_checker.schemas.relay import LogRecord
from symptom_checker.services.search_service import format_context, search_web

logger = logging.getLogger(__name__)

LogDispatcher = Callable[[LogRecord], None]


def _dispatch_log(dispatch_log: LogDispatcher, record: LogRecord) -> None:
    try:
        dispatch_log(record)
    except Exception as e:
        logger.error("[relay] failed to dispatch log record: %s", e)


def answer(
    query: str | None,
    settings: Settings,
    dispatch_log: LogDispatcher | None = None,
    today: date | None = None,
) -> str:
    """
    Return the inference provider's answer for `query`, verbatim.

    Raises MessageRequiredError for a blank query, ConfigurationError when the
    search credential is missing, InferenceError when inference fails.
    `dispatch_log` receives the LogRecord when the log store is enabled.
    """
    query = (query or "").strip()
    if not query:
        raise MessageRequiredError()
    if not settings.serper_api_key:
        raise ConfigurationError("SERPER_API_KEY missing.")
    logger.info("[relay:answer] IN  query_len=%d", len(query))

    results = search_web(query, settings.serper_api_key)
    context = format_context(results)
    logger.info("[relay:answer] context results=%d context_len=%d", len(results), len(context))

    request = build_inference_request(context, query, today=today)
    reply = complete(request, settings)

    if settings.log_store_enabled and dispatch_log is not None:
        record = LogRecord(
            timestamp=datetime.now(timezone.utc).isoformat(),
            query=query,
            response=reply,
            context=context,
        )
        _dispatch_log(dispatch_log, record)

    logger.info("[relay:answer] OUT reply_len=%d", len(reply))
    return reply
