"""
Inference provider: OpenAI, Hugging Face router, or Cloudflare Workers AI.

The backend is chosen once from settings (INFERENCE_PROVIDER, or "auto": OpenAI when
OPENAI_API_KEY is set, Cloudflare when account id + token are set, else Hugging Face).
Inference is the one fatal phase of a relay request: every failure, including an
empty completion, raises InferenceError.
"""

import logging
from typing import Any

import httpx
from openai import OpenAI, OpenAIError

from symptom_checker.core.config import CLOUDFLARE_AI_URL, HF_CHAT_URL, LLM_API_TIMEOUT, Settings
from symptom_checker.core.errors import ConfigurationError, InferenceError
from symptom_checker.schemas.relay import InferenceRequest

logger = logging.getLogger(__name__)


def _call_openai(request: InferenceRequest, settings: Settings, timeout: float) -> str:
    """Call OpenAI chat completions. Returns generated text."""
    if not settings.openai_api_key:
        raise ConfigurationError("OPENAI_API_KEY missing.")
    client = OpenAI(api_key=settings.openai_api_key, timeout=timeout)
    try:
        response = client.chat.completions.create(
            model=settings.openai_llm_model,
            messages=request.to_messages(),
            max_tokens=request.max_tokens,
        )
    except OpenAIError as e:
        raise InferenceError(f"OpenAI request failed: {e}") from e
    msg = response.choices[0].message if response.choices else None
    out = (getattr(msg, "content", None) or "") if msg else ""
    logger.info("[llm:openai] OUT response_len=%d", len(out))
    return out


def _post_json(
    url: str,
    payload: dict[str, Any],
    headers: dict[str, str],
    timeout: float,
    client: httpx.Client | None,
    label: str,
) -> Any:
    """POST JSON and return the decoded body. Raises InferenceError on any transport/status/body problem."""
    try:
        if client is None:
            with httpx.Client(timeout=timeout) as http:
                response = http.post(url, json=payload, headers=headers)
        else:
            response = client.post(url, json=payload, headers=headers, timeout=timeout)
    except httpx.TimeoutException as e:
        raise InferenceError(f"{label} request timed out after {timeout:.0f}s") from e
    except httpx.HTTPError as e:
        raise InferenceError(f"{label} request failed: {e}") from e
    if response.status_code != 200:
        logger.warning("[llm:%s] error %s: %s", label, response.status_code, response.text[:200])
        raise InferenceError(f"{label} returned HTTP {response.status_code}")
    try:
        return response.json()
    except ValueError as e:
        raise InferenceError(f"{label} returned a non-JSON body") from e


def _call_hf(
    request: InferenceRequest,
    settings: Settings,
    timeout: float,
    client: httpx.Client | None = None,
) -> str:
    """Call Hugging Face router chat completions. Returns generated text."""
    if not settings.hf_api_key:
        raise ConfigurationError("HF_API_KEY missing.")
    headers = {"Authorization": f"Bearer {settings.hf_api_key}", "Content-Type": "application/json"}
    payload = {
        "model": settings.hf_llm_model,
        "messages": request.to_messages(),
        "max_tokens": request.max_tokens,
    }
    data = _post_json(HF_CHAT_URL, payload, headers, timeout, client, "hf")
    choices = data.get("choices") if isinstance(data, dict) else None
    if not choices or not isinstance(choices[0], dict):
        raise InferenceError("hf returned no choices")
    msg = choices[0].get("message")
    if not isinstance(msg, dict):
        raise InferenceError("hf returned a malformed message")
    out = str(msg.get("content") or "")
    logger.info("[llm:hf] OUT response_len=%d", len(out))
    return out


def _call_cloudflare(
    request: InferenceRequest,
    settings: Settings,
    timeout: float,
    client: httpx.Client | None = None,
) -> str:
    """Call Cloudflare Workers AI (text generation). Returns generated text."""
    if not settings.cloudflare_account_id or not settings.cloudflare_api_token:
        raise ConfigurationError("CLOUDFLARE_ACCOUNT_ID and CLOUDFLARE_API_TOKEN are required.")
    url = CLOUDFLARE_AI_URL.format(account_id=settings.cloudflare_account_id, model=settings.cloudflare_model)
    headers = {"Authorization": f"Bearer {settings.cloudflare_api_token}", "Content-Type": "application/json"}
    payload = {"messages": request.to_messages(), "max_tokens": request.max_tokens}
    data = _post_json(url, payload, headers, timeout, client, "cloudflare")
    if not isinstance(data, dict) or data.get("success") is False:
        errors = data.get("errors") if isinstance(data, dict) else None
        raise InferenceError(f"cloudflare reported failure: {errors}")
    result = data.get("result") or {}
    out = str(result.get("response") or "") if isinstance(result, dict) else ""
    logger.info("[llm:cloudflare] OUT response_len=%d", len(out))
    return out


def complete(
    request: InferenceRequest,
    settings: Settings,
    timeout: float = LLM_API_TIMEOUT,
    client: httpx.Client | None = None,
) -> str:
    """
    Run one two-message completion on the configured backend and return its text.
    `client` is an optional httpx client for the HTTP backends (Hugging Face, Cloudflare).
    Raises InferenceError on provider failure or an empty completion.
    """
    provider = settings.resolved_provider()
    logger.info(
        "[llm] IN  provider=%s system_len=%d user_len=%d max_tokens=%d",
        provider,
        len(request.system_instruction),
        len(request.user_content),
        request.max_tokens,
    )
    if provider == "openai":
        out = _call_openai(request, settings, timeout)
    elif provider == "cloudflare":
        out = _call_cloudflare(request, settings, timeout, client)
    elif provider == "huggingface":
        out = _call_hf(request, settings, timeout, client)
    else:
        raise ConfigurationError(f"Unknown inference provider: {provider!r}")
    if not out.strip():
        raise InferenceError(f"{provider} returned an empty completion")
    return out
