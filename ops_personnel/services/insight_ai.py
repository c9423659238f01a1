"""
AI performance insight for a single employee.

The generator never raises: every failure comes back as a string starting
with ERROR_PREFIX so the caller can tell a narrative from a failure without
exception handling. Each call is one attempt; nothing is retried.
"""
import json
import logging
from typing import Any, Dict, Iterable

import requests

from ops_personnel.core.config import settings
from ops_personnel.core.exceptions import ExternalServiceError
from ops_personnel.core.prompts import INSIGHT_SYSTEM, INSIGHT_USER_TEMPLATE, get_prompt
from ops_personnel.services.openrouter_client import call_openrouter

logger = logging.getLogger(__name__)

ERROR_PREFIX = "ERROR:"


def is_error(result: str) -> bool:
    return result.startswith(ERROR_PREFIX)


def _dump(records: Iterable) -> list:
    return [r.model_dump(mode="json", by_alias=True) for r in records]


def _newest_first(records: Iterable) -> list:
    return sorted(records, key=lambda r: r.date, reverse=True)


def build_insight_bundle(employee, work_issues: Iterable, attendance: Iterable, behaviour_issues: Iterable) -> Dict[str, Any]:
    """Data sent to the model. Newest records first."""
    return {
        "name": employee.name,
        "role": employee.job_title or employee.role,
        "currentScore": employee.effective_score,
        "workIssues": _dump(_newest_first(work_issues)),
        "attendance": _dump(_newest_first(attendance)),
        "behaviourIssues": _dump(_newest_first(behaviour_issues)),
    }


def generate_performance_insight(bundle: Dict[str, Any]) -> str:
    if settings.ai.kill_switch:
        logger.warning("Insight requested while AI kill switch is active")
        return f"{ERROR_PREFIX} AI analysis is currently disabled by the administrator."

    messages = [
        {"role": "system", "content": INSIGHT_SYSTEM},
        {"role": "user", "content": get_prompt(INSIGHT_USER_TEMPLATE, bundle_json=json.dumps(bundle, default=str))},
    ]

    try:
        text = call_openrouter(messages)
    except ExternalServiceError as e:
        logger.error(f"Insight unavailable: {e.message}")
        return f"{ERROR_PREFIX} API configuration missing. Set OPENROUTER_API_KEY in the environment."
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        logger.error(f"Insight request rejected with HTTP {status}")
        if status == 401:
            return f"{ERROR_PREFIX} Invalid API key. Please check your credentials."
        if status == 429:
            return f"{ERROR_PREFIX} Rate limit exceeded. Please try again in a minute."
        return f"{ERROR_PREFIX} Analysis failed with HTTP status {status}."
    except requests.Timeout:
        logger.error("Insight request timed out")
        return f"{ERROR_PREFIX} The AI service did not respond in time."
    except requests.RequestException as e:
        logger.error(f"Insight request failed: {e}")
        return f"{ERROR_PREFIX} Could not reach the AI service."
    except (ValueError, KeyError, TypeError) as e:
        # Malformed JSON body
        logger.error(f"Insight response could not be parsed: {e}")
        return f"{ERROR_PREFIX} The AI service returned an unreadable response."

    if not text or not text.strip():
        logger.error("Insight request returned an empty response")
        return f"{ERROR_PREFIX} Empty response from the AI service."
    return text.strip()
