# Copyright 2025 Loopper-AI
# Data models for the S3 forwarder

from __future__ import annotations

import logging
import math
import urllib.parse
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal

logger = logging.getLogger(__name__)

OutcomeStatus = Literal["skipped", "delivered", "failed"]

# Zero time (0001-01-01T00:00:00Z) stands in for a missing eventTime
ZERO_TIME = datetime.min.replace(tzinfo=timezone.utc)


def _parse_event_time(value: Any) -> datetime:
    if not isinstance(value, str) or not value:
        return ZERO_TIME
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning("Unparseable eventTime=%s, using zero time", value)
        return ZERO_TIME
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class NotificationRecord:
    """One S3 notification: where the object lives and when it changed."""

    bucket: str
    key: str
    source: str = ""
    event_time: datetime = ZERO_TIME

    @property
    def is_directory_marker(self) -> bool:
        return self.key.endswith("/")

    @property
    def epoch_seconds(self) -> int:
        return math.floor(self.event_time.timestamp())

    @classmethod
    def from_event_record(cls, raw: dict[str, Any]) -> NotificationRecord | None:
        """Build from one entry of event["Records"]. Returns None if bucket or key is missing."""
        s3 = raw.get("s3") if isinstance(raw, dict) else None
        if not isinstance(s3, dict):
            return None
        bucket = (s3.get("bucket") or {}).get("name")
        key = (s3.get("object") or {}).get("key")
        if not bucket or not key:
            return None

        return cls(
            bucket=bucket,
            # Keys arrive URL-encoded in S3 notifications
            key=urllib.parse.unquote_plus(key),
            source=raw.get("eventSource") or "",
            event_time=_parse_event_time(raw.get("eventTime")),
        )


@dataclass
class OutboundEnvelope:
    """Structured-mode HEC event body."""

    time: int
    host: str
    source: str
    sourcetype: str
    index: str
    event: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "Time": self.time,
            "Host": self.host,
            "Source": self.source,
            "Sourcetype": self.sourcetype,
            "Index": self.index,
            "Event": self.event,
        }


@dataclass
class OutboundRequest:
    """Fully formed request, ready to send."""

    url: str
    body: bytes
    headers: dict[str, str] = field(default_factory=dict)
    method: str = "POST"


@dataclass
class HttpResponse:
    """Status and body text returned by the collector."""

    status_code: int
    body: str = ""


@dataclass
class DeliveryOutcome:
    """Result of handling one notification record."""

    status: OutcomeStatus
    key: str
    status_code: int | None = None
    response_body: str = ""
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.status != "failed"
