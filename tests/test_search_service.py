"""
Unit tests for the search phase: search_web degradation and format_context.
"""

import json

import httpx

from symptom_checker.schemas.relay import SearchResult
from symptom_checker.services.search_service import format_context, search_web


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestSearchWeb:
    """Tests for search_web()."""

    def test_posts_query_with_api_key_and_ranks_results(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["key"] = request.headers.get("X-API-KEY")
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "organic": [
                        {"title": "Migraine", "snippet": "Throbbing pain.", "link": "https://a"},
                        {"title": "Strep throat", "snippet": "Bacterial infection."},
                    ]
                },
            )

        results = search_web("headache", "secret", client=_client(handler))
        assert seen == {"key": "secret", "body": {"q": "headache"}}
        assert results == [
            SearchResult(rank=1, title="Migraine", snippet="Throbbing pain."),
            SearchResult(rank=2, title="Strep throat", snippet="Bacterial infection."),
        ]

    def test_missing_organic_is_empty(self) -> None:
        results = search_web("x", "k", client=_client(lambda r: httpx.Response(200, json={"searchParameters": {}})))
        assert results == []

    def test_skips_non_object_entries_and_fills_missing_fields(self) -> None:
        body = {"organic": ["junk", {"title": "Only title"}, {"snippet": "Only snippet"}]}
        results = search_web("x", "k", client=_client(lambda r: httpx.Response(200, json=body)))
        assert results == [
            SearchResult(rank=1, title="Only title", snippet=""),
            SearchResult(rank=2, title="", snippet="Only snippet"),
        ]

    def test_organic_not_a_list_degrades(self) -> None:
        results = search_web("x", "k", client=_client(lambda r: httpx.Response(200, json={"organic": "oops"})))
        assert results == []

    def test_bad_status_degrades(self) -> None:
        results = search_web("x", "k", client=_client(lambda r: httpx.Response(403, json={"message": "bad key"})))
        assert results == []

    def test_non_json_body_degrades(self) -> None:
        results = search_web("x", "k", client=_client(lambda r: httpx.Response(200, text="<html>oops</html>")))
        assert results == []

    def test_timeout_degrades(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        assert search_web("x", "k", client=_client(handler)) == []

    def test_unreachable_degrades(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        assert search_web("x", "k", client=_client(handler)) == []


class TestFormatContext:
    """Tests for format_context()."""

    def test_empty_returns_fallback(self) -> None:
        assert format_context([]) == "No web results found."

    def test_one_line_per_result(self) -> None:
        results = [
            SearchResult(rank=1, title="A", snippet="first"),
            SearchResult(rank=2, title="B", snippet="second"),
        ]
        assert format_context(results) == "1. A: first\n2. B: second"
