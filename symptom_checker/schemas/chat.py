"""Schemas for the chat endpoint (client-to-relay wire contract)."""

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Request body for POST /. Emptiness is checked by the relay so it maps to the error shape."""

    message: str = Field(..., description="Free-text symptom description.")


class ChatReply(BaseModel):
    """Success response for POST /."""

    reply: str = Field(..., description="Formatted answer from the inference provider (markdown).")

    model_config = {
        "json_schema_extra": {
            "examples": [{"reply": "### Detailed Analysis of Possible Conditions\n..."}]
        }
    }


class ErrorReply(BaseModel):
    """Failure response for any non-success status."""

    error: str = Field(..., description="Human-readable failure reason.")
