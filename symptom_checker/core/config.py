"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
Optional collaborators (log store, inference backend) are resolved once here,
at startup, instead of being probed at request time.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

# Serper (web search)
SERPER_SEARCH_URL: str = "https://google.serper.dev/search"

# Inference backends
HF_CHAT_URL: str = "https://router.huggingface.co/v1/chat/completions"
CLOUDFLARE_AI_URL: str = "https://api.cloudflare.com/client/v4/accounts/{account_id}/ai/run/{model}"
INFERENCE_PROVIDERS: frozenset[str] = frozenset({"auto", "openai", "huggingface", "cloudflare"})

# Upper bound on generated answer length (tokens)
MAX_OUTPUT_TOKENS: int = 1536

# API timeouts (seconds)
SEARCH_API_TIMEOUT: float = 15.0
LLM_API_TIMEOUT: float = 60.0

# Client (Streamlit UI) timeouts and polling
RELAY_TIMEOUT: float = 60.0
PROBE_TIMEOUT: float = 10.0

# Fallback context when search yields nothing
NO_RESULTS_CONTEXT: str = "No web results found."

_TRUTHY = {"1", "true", "yes", "on"}


def _env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    """Relay and client settings resolved from the environment."""

    serper_api_key: str = ""
    inference_provider: str = "auto"
    openai_api_key: str = ""
    openai_llm_model: str = "gpt-4o-mini"
    hf_api_key: str = ""
    hf_llm_model: str = "meta-llama/Llama-3.2-3B-Instruct"
    cloudflare_account_id: str = ""
    cloudflare_api_token: str = ""
    cloudflare_model: str = "@cf/meta/llama-3-8b-instruct"
    log_store_enabled: bool = False
    log_db_path: str = "data/chat_logs.db"
    relay_url: str = "http://localhost:8000"
    transcript_path: str = "data/transcript.json"
    health_probe_enabled: bool = True
    health_probe_interval: int = 60

    def resolved_provider(self) -> str:
        """Concrete inference backend: explicit choice, or the first one with credentials."""
        if self.inference_provider != "auto":
            return self.inference_provider
        if self.openai_api_key:
            return "openai"
        if self.cloudflare_account_id and self.cloudflare_api_token:
            return "cloudflare"
        return "huggingface"


def load_settings() -> Settings:
    """Read settings from the environment (and .env, loaded at import)."""
    provider = _env("INFERENCE_PROVIDER", "auto").lower() or "auto"
    if provider not in INFERENCE_PROVIDERS:
        raise ValueError(
            f"INFERENCE_PROVIDER must be one of {sorted(INFERENCE_PROVIDERS)}, got {provider!r}"
        )
    try:
        interval = int(_env("HEALTH_PROBE_INTERVAL", "60") or "60")
    except ValueError:
        interval = 60
    return Settings(
        serper_api_key=_env("SERPER_API_KEY"),
        inference_provider=provider,
        openai_api_key=_env("OPENAI_API_KEY"),
        openai_llm_model=_env("OPENAI_LLM_MODEL", "gpt-4o-mini") or "gpt-4o-mini",
        hf_api_key=_env("HF_API_KEY"),
        # Router chat completions require a chat model.
        hf_llm_model=_env("HF_LLM_MODEL", "meta-llama/Llama-3.2-3B-Instruct")
        or "meta-llama/Llama-3.2-3B-Instruct",
        cloudflare_account_id=_env("CLOUDFLARE_ACCOUNT_ID"),
        cloudflare_api_token=_env("CLOUDFLARE_API_TOKEN"),
        cloudflare_model=_env("CLOUDFLARE_MODEL", "@cf/meta/llama-3-8b-instruct")
        or "@cf/meta/llama-3-8b-instruct",
        log_store_enabled=_env_flag("LOG_STORE_ENABLED"),
        log_db_path=_env("LOG_DB_PATH", "data/chat_logs.db") or "data/chat_logs.db",
        relay_url=_env("RELAY_URL", "http://localhost:8000") or "http://localhost:8000",
        transcript_path=_env("TRANSCRIPT_PATH", "data/transcript.json") or "data/transcript.json",
        health_probe_enabled=_env_flag("HEALTH_PROBE_ENABLED", default=True),
        health_probe_interval=max(interval, 5),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings resolved once per process. FastAPI dependency; tests override it."""
    return load_settings()
