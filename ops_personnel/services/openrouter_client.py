import logging
from typing import Optional

import requests

from ops_personnel.core.config import settings
from ops_personnel.core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"


def call_openrouter(messages: list, temperature: Optional[float] = None, top_p: Optional[float] = None) -> str:
    """
    Call OpenRouter API with the specified messages. One attempt, no retries.

    Args:
        messages: List of message dictionaries with 'role' and 'content'
        temperature: Sampling temperature (defaults to the configured value)
        top_p: Nucleus sampling cutoff (defaults to the configured value)

    Returns:
        str: The AI response content (may be empty)

    Raises:
        ExternalServiceError: If the API key is not configured.
        requests.HTTPError: If the API call fails.
        requests.RequestException: On transport failures and timeouts.
    """
    api_key = settings.ai.openrouter_api_key
    if not api_key:
        raise ExternalServiceError("OPENROUTER_API_KEY is not configured", reason="missing_key")

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }

    payload = {
        "model": settings.ai.model_name,
        "messages": messages,
        "temperature": settings.ai.temperature if temperature is None else temperature,
        "top_p": settings.ai.top_p if top_p is None else top_p,
    }

    response = requests.post(
        OPENROUTER_URL, json=payload, headers=headers, timeout=settings.ai.request_timeout_seconds
    )
    response.raise_for_status()
    choices = response.json().get("choices") or []
    if not choices:
        return ""
    return (choices[0].get("message") or {}).get("content") or ""
