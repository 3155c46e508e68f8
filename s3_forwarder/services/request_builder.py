# Copyright 2025 Loopper-AI
# Builds the outbound HEC request for one notification record
#
# Structured mode: POST <host>/services/collector with a JSON envelope body.
# Raw mode:        POST <host>/services/collector/raw?host=..&source=..&sourcetype=..&index=..
#                  with the object bytes as the body.

from __future__ import annotations

import json
import urllib.parse

from ..config import ForwardingConfig
from ..exceptions import BuildError, ConfigurationError
from ..models import NotificationRecord, OutboundEnvelope, OutboundRequest
from ..utils import resolve_hostname

FORMATTED_ENDPOINT_SUFFIX = "/services/collector"
RAW_ENDPOINT_SUFFIX = "/services/collector/raw"

CONTENT_TYPE_HEADER = "Content-Type"
CONTENT_ENCODING_HEADER = "Content-Encoding"
CONTENT_TYPE = "application/json"


class RequestBuilder:
    """Turns (record, content) into an OutboundRequest. Performs no network I/O."""

    def __init__(self, config: ForwardingConfig):
        self.config = config

    def build(self, record: NotificationRecord, content: bytes) -> OutboundRequest:
        """
        Build the request for a single record.

        Raises:
            ConfigurationError: destination missing or encoding method unsupported
            BuildError: destination is not a usable URL
        """
        is_valid, error_msg = self.config.validate()
        if not is_valid:
            raise ConfigurationError(error_msg)

        host = resolve_hostname()
        url = self.build_url(host, record.source)
        body = self.build_body(record, host, content)

        headers = {CONTENT_TYPE_HEADER: CONTENT_TYPE}
        if self.config.encoding_method:
            headers[CONTENT_ENCODING_HEADER] = self.config.encoding_method

        return OutboundRequest(url=url, body=body, headers=headers)

    def build_url(self, host: str, source: str) -> str:
        try:
            parts = urllib.parse.urlsplit(self.config.destination)
        except ValueError as e:
            raise BuildError(f"invalid destination URL {self.config.destination!r}: {e}") from e
        if not parts.scheme or not parts.netloc:
            raise BuildError(f"invalid destination URL {self.config.destination!r}: scheme and host required")

        if not self.config.is_raw:
            return urllib.parse.urlunsplit(parts._replace(path=FORMATTED_ENDPOINT_SUFFIX))

        metadata = {
            "host": host,
            "source": source,
            "sourcetype": self.config.sourcetype,
            "index": self.config.index,
        }
        # Keep every other pair the destination carries, repeated keys included
        pairs = [
            (k, v)
            for k, v in urllib.parse.parse_qsl(parts.query, keep_blank_values=True)
            if k not in metadata
        ]
        pairs.extend(metadata.items())
        # Sorted by key only; values of a repeated key keep their order
        encoded = urllib.parse.urlencode(sorted(pairs, key=lambda pair: pair[0]))
        return urllib.parse.urlunsplit(parts._replace(path=RAW_ENDPOINT_SUFFIX, query=encoded))

    def build_body(self, record: NotificationRecord, host: str, content: bytes) -> bytes:
        if self.config.is_raw:
            return content

        envelope = OutboundEnvelope(
            time=record.epoch_seconds,
            host=host,
            source=record.source,
            sourcetype=self.config.sourcetype,
            index=self.config.index,
            event=content.decode("utf-8", errors="replace"),
        )
        return json.dumps(envelope.to_dict(), separators=(",", ":"), ensure_ascii=False).encode("utf-8")
