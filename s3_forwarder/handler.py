# Copyright 2025 Loopper-AI
# Lambda handler: S3 notification → fetch object → POST to HEC endpoint
#
# S3 event notifications invoke with {"Records": [...]}.
# One outbound request per object; directory markers are skipped.
#
# Any failure raises, failing the whole invocation:
#   S3 read error, bad config, TLS key pair, network error, 4xx/5xx from collector

from __future__ import annotations

import logging
from typing import Any

from .clients import S3Client, TLSClientFactory
from .config import ForwardingConfig
from .exceptions import ForwarderError
from .parsers import S3EventParser
from .services import Dispatcher, RequestBuilder

logger = logging.getLogger()


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """S3 event notification → HTTP Event Collector."""
    request_id = getattr(context, "aws_request_id", "") if context else ""
    try:
        config = ForwardingConfig.from_environment()
    except ForwarderError as e:
        logger.error("Configuration error: %s request_id=%s", e, request_id)
        raise
    logger.setLevel(getattr(logging, config.log_level, logging.INFO))

    records = S3EventParser.extract_records(event)
    logger.info("receiving S3 Event records. Count: %d request_id=%s", len(records), request_id)

    try:
        http_client = TLSClientFactory.build(config)
        dispatcher = Dispatcher(S3Client(), http_client, RequestBuilder(config))
        outcomes = dispatcher.dispatch(records)
    except ForwarderError as e:
        logger.error("Forward failed: error=%s request_id=%s", e, request_id)
        raise

    delivered = sum(1 for o in outcomes if o.status == "delivered")
    skipped = sum(1 for o in outcomes if o.status == "skipped")
    logger.info("Forward success: delivered=%d skipped=%d request_id=%s", delivered, skipped, request_id)
    return {"status": "ok", "delivered": delivered, "skipped": skipped}
