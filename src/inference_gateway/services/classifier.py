"""
Maps provider failures onto the closed set of attempt outcomes.

Structured signals (HTTP status, JSON body fields, headers) are checked
first. Substring matching on the error text is a last resort for providers
that report failures without a usable status; it is a fragile heuristic and
only the retry policy it triggers matters, not the exact phrases.
"""

import re
from typing import Optional

from inference_gateway.core.errors import ProviderError, ProviderUnreachableError
from inference_gateway.core.types import OutcomeStatus

LOADING_STATUSES = frozenset({502, 503, 504})
RATE_LIMITED_STATUSES = frozenset({429})
NOT_FOUND_STATUSES = frozenset({404, 410})

ESTIMATED_TIME_PATTERN = re.compile(r"estimated_time['\":\s]+(\d+(?:\.\d+)?)")

_MESSAGE_RULES = (
    (OutcomeStatus.LOADING, ("loading",)),
    (OutcomeStatus.RATE_LIMITED, ("rate limit", "too many requests")),
    (OutcomeStatus.NOT_FOUND, ("not available", "not supported", "no endpoints found", "not found")),
)


def parse_wait_hint(error: ProviderError) -> Optional[float]:
    """Extract the provider's suggested wait, in seconds, if it gave one."""
    body = error.body
    if isinstance(body, dict):
        estimated = body.get("estimated_time")
        if isinstance(estimated, (int, float)) and estimated >= 0:
            return float(estimated)

    retry_after = error.headers.get("retry-after")
    if retry_after:
        try:
            return max(float(retry_after), 0.0)
        except ValueError:
            pass

    match = ESTIMATED_TIME_PATTERN.search(error.message)
    if match:
        return float(match.group(1))
    return None


def classify_message(message: str) -> Optional[OutcomeStatus]:
    lowered = message.lower()
    for status, needles in _MESSAGE_RULES:
        if any(needle in lowered for needle in needles):
            return status
    return None


def classify(
    error: ProviderError, server_error: OutcomeStatus = OutcomeStatus.FATAL
) -> tuple[OutcomeStatus, Optional[float]]:
    """
    Return the outcome status and optional wait hint for a failed call.

    `server_error` is the outcome for any other 5xx status whose message
    matches no rule.
    """
    status = error.status

    if status in LOADING_STATUSES:
        outcome = OutcomeStatus.LOADING
    elif status in RATE_LIMITED_STATUSES:
        outcome = OutcomeStatus.RATE_LIMITED
    elif status in NOT_FOUND_STATUSES:
        outcome = OutcomeStatus.NOT_FOUND
    elif isinstance(error, ProviderUnreachableError):
        outcome = OutcomeStatus.LOADING
    elif status is not None and status >= 500:
        outcome = classify_message(error.message) or server_error
    else:
        outcome = classify_message(error.message) or OutcomeStatus.FATAL

    if outcome in (OutcomeStatus.LOADING, OutcomeStatus.RATE_LIMITED):
        return outcome, parse_wait_hint(error)
    return outcome, None
