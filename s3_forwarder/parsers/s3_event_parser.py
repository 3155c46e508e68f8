# Copyright 2025 Loopper-AI
# S3 notification event parser

from __future__ import annotations

import logging
from typing import Any

from ..models import NotificationRecord

logger = logging.getLogger(__name__)


class S3EventParser:
    """Parser for S3 event notifications delivered to Lambda."""

    @staticmethod
    def extract_records(event: dict[str, Any]) -> list[NotificationRecord]:
        """Notification records in delivery order. Malformed entries are skipped."""
        raw_records = (event.get("Records") or []) if isinstance(event, dict) else []

        records: list[NotificationRecord] = []
        for position, raw in enumerate(raw_records):
            record = NotificationRecord.from_event_record(raw)
            if record is None:
                logger.warning("Skipping malformed S3 record at position=%d", position)
                continue
            records.append(record)
        return records
