"""Well-known secret names used by the LLM and GitHub integrations."""

from typing import Optional

OPENAI_API_KEY = "openai_api_key"
ANTHROPIC_API_KEY = "anthropic_api_key"
OPENROUTER_API_KEY = "openrouter_api_key"
GITHUB_TOKEN = "github_token"

_LLM_KEY_NAMES = {
    "openai": OPENAI_API_KEY,
    "anthropic": ANTHROPIC_API_KEY,
    "openrouter": OPENROUTER_API_KEY,
    "ollama": None,  # local, no key
}


def llm_api_key_name(provider: str) -> Optional[str]:
    """Secret name holding the API key for an LLM provider (None for ollama)."""
    try:
        return _LLM_KEY_NAMES[provider.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown LLM provider: {provider!r}") from None
