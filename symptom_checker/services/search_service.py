"""
Web search phase: query Serper for ranked snippets and format them as prompt context.

Search is advisory. Any provider failure (unreachable, timeout, bad status,
malformed body) degrades to an empty result list so the request can proceed
with the fallback context.
"""

import logging
from typing import Any

import httpx

from symptom_checker.core.config import NO_RESULTS_CONTEXT, SEARCH_API_TIMEOUT, SERPER_SEARCH_URL
from symptom_checker.schemas.relay import SearchResult

logger = logging.getLogger(__name__)


def _parse_organic(data: Any) -> list[SearchResult]:
    """Turn Serper's organic list into ranked results. Non-dict entries are skipped."""
    if not isinstance(data, dict):
        logger.warning("[search] response body is not an object: %s", type(data).__name__)
        return []
    organic = data.get("organic")
    if organic is None:
        return []
    if not isinstance(organic, list):
        logger.warning("[search] 'organic' is not a list: %s", type(organic).__name__)
        return []
    results: list[SearchResult] = []
    for item in organic:
        if not isinstance(item, dict):
            continue
        title = str(item.get("title") or "").strip()
        snippet = str(item.get("snippet") or "").strip()
        results.append(SearchResult(rank=len(results) + 1, title=title, snippet=snippet))
    return results


def search_web(
    query: str,
    api_key: str,
    *,
    url: str = SERPER_SEARCH_URL,
    timeout: float = SEARCH_API_TIMEOUT,
    client: httpx.Client | None = None,
) -> list[SearchResult]:
    """
    POST {"q": query} to the search provider and return ranked snippets.
    Returns [] on any failure; never raises for provider problems.
    """
    logger.info("[search] IN  query_len=%d", len(query))
    headers = {"X-API-KEY": api_key, "Content-Type": "application/json"}
    try:
        if client is None:
            with httpx.Client(timeout=timeout) as http:
                response = http.post(url, json={"q": query}, headers=headers)
        else:
            response = client.post(url, json={"q": query}, headers=headers, timeout=timeout)
        if response.status_code != 200:
            logger.warning("[search] provider error %s: %s", response.status_code, response.text[:200])
            return []
        data = response.json()
    except httpx.TimeoutException:
        logger.warning("[search] provider timed out after %.1fs", timeout)
        return []
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("[search] request failed: %s", e)
        return []
    results = _parse_organic(data)
    logger.info("[search] OUT results=%d", len(results))
    return results


def format_context(results: list[SearchResult]) -> str:
    """Numbered plain-text block, one "{rank}. {title}: {snippet}" line per result."""
    if not results:
        return NO_RESULTS_CONTEXT
    return "\n".join(f"{r.rank}. {r.title}: {r.snippet}" for r in results)
