# Copyright 2025 Loopper-AI
# Per-record dispatch: fetch → build → send → classify
#
# Records are handled strictly in order. The first failure is raised and the
# rest of the batch is not attempted.

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..clients import HttpClient, S3Client
from ..exceptions import UpstreamStatusError
from ..models import DeliveryOutcome, NotificationRecord
from .request_builder import RequestBuilder
from .response_classifier import classify_response

logger = logging.getLogger(__name__)


class Dispatcher:
    """Forwards notified S3 objects to the collector, one request per record."""

    def __init__(self, storage: S3Client, http_client: HttpClient, builder: RequestBuilder):
        self.storage = storage
        self.http_client = http_client
        self.builder = builder

    def handle_record(self, record: NotificationRecord) -> DeliveryOutcome:
        """Forward one record.

        Raises:
            ForwarderError: any fetch, build, transport or upstream status failure
        """
        if record.is_directory_marker:
            logger.info("Skipping directory marker bucket=%s key=%s", record.bucket, record.key)
            return DeliveryOutcome(status="skipped", key=record.key)

        content = self.storage.get_object_content(record.bucket, record.key)
        request = self.builder.build(record, content)
        response = self.http_client.send(request)

        outcome = classify_response(record.key, response)
        if not outcome.success:
            logger.error(
                "Collector rejected key=%s status=%s body=%s",
                record.key,
                outcome.status_code,
                outcome.response_body[:500],
            )
            raise UpstreamStatusError(status_code=response.status_code, response_body=response.body)

        logger.info("Delivered key=%s bytes=%d status=%s", record.key, len(content), outcome.status_code)
        return outcome

    def dispatch(self, records: Iterable[NotificationRecord]) -> list[DeliveryOutcome]:
        """Forward records in order, stopping at the first failure."""
        return [self.handle_record(record) for record in records]
