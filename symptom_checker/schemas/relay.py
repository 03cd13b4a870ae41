"""Schemas passed between relay phases: search results, inference request, log record."""

from pydantic import BaseModel, Field

from symptom_checker.core.config import MAX_OUTPUT_TOKENS


class SearchResult(BaseModel):
    """One ranked web snippet. Built per request, never persisted."""

    rank: int = Field(..., ge=1, description="1-based position in provider order.")
    title: str = ""
    snippet: str = ""


class InferenceRequest(BaseModel):
    """Two-part prompt sent to the inference provider."""

    system_instruction: str
    user_content: str
    max_tokens: int = Field(MAX_OUTPUT_TOKENS, ge=1)

    def to_messages(self) -> list[dict[str, str]]:
        """Ordered chat-completions message list: system first, then user."""
        return [
            {"role": "system", "content": self.system_instruction},
            {"role": "user", "content": self.user_content},
        ]


class LogRecord(BaseModel):
    """One logged exchange. Write-once."""

    timestamp: str = Field(..., description="ISO-8601 UTC timestamp.")
    query: str
    response: str
    context: str
