# Copyright 2025 Loopper-AI
# Maps collector responses to delivery outcomes

from __future__ import annotations

from ..models import DeliveryOutcome, HttpResponse


def is_failure_status(status_code: int) -> bool:
    """Client and server errors (4xx, 5xx) are failures; anything else is delivered."""
    return 400 <= status_code < 600


def classify_response(key: str, response: HttpResponse) -> DeliveryOutcome:
    if is_failure_status(response.status_code):
        return DeliveryOutcome(
            status="failed",
            key=key,
            status_code=response.status_code,
            response_body=response.body,
            error=f"HTTP {response.status_code}",
        )
    return DeliveryOutcome(status="delivered", key=key, status_code=response.status_code)
