"""
API route aggregator: register endpoints; no logic, only delegate to the relay.
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends
from fastapi.responses import PlainTextResponse, Response

from symptom_checker.api.handlers import CORS_HEADERS
from symptom_checker.core.config import Settings, get_settings
from symptom_checker.core.errors import RelayError
from symptom_checker.core.log_store import write_log_safely
from symptom_checker.schemas.chat import ChatReply, ChatRequest, ErrorReply
from symptom_checker.schemas.relay import LogRecord
from symptom_checker.services.relay_service import answer

logger = logging.getLogger(__name__)
router = APIRouter()


# --- System ---

@router.get("/", tags=["system"], response_class=PlainTextResponse, summary="Liveness probe")
def root() -> str:
    return "OK"


@router.options("/", tags=["system"], include_in_schema=False)
def options_root() -> Response:
    """Bare OPTIONS (no preflight headers): permissive CORS headers, no body."""
    return Response(status_code=204, headers=CORS_HEADERS)


@router.get("/health", tags=["system"])
def health(settings: Settings = Depends(get_settings)) -> dict:
    return {
        "ok": True,
        "log_store_enabled": settings.log_store_enabled,
        "inference_provider": settings.resolved_provider(),
    }


# --- Chat ---

@router.post(
    "/",
    response_model=ChatReply,
    tags=["chat"],
    summary="Answer a symptom description",
    description="Search the web, ask the LLM with the results as context, return the formatted answer. "
    "400 on empty message, 500 on missing configuration, 502 on inference failure.",
    responses={400: {"model": ErrorReply}, 500: {"model": ErrorReply}, 502: {"model": ErrorReply}},
)
def post_chat(
    body: ChatRequest,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_settings),
) -> ChatReply:
    logger.info("[api:post_chat] IN  message_len=%d", len(body.message))

    def dispatch_log(record: LogRecord) -> None:
        background_tasks.add_task(write_log_safely, settings.log_db_path, record)

    try:
        reply = answer(body.message, settings, dispatch_log=dispatch_log)
    except RelayError:
        raise
    except Exception as e:
        logger.exception("Relay failed")
        raise RelayError(str(e) or "Internal server error.") from e
    logger.info("[api:post_chat] OUT reply_len=%d", len(reply))
    return ChatReply(reply=reply)
