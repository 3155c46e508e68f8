# Copyright 2025 Loopper-AI
# Forwarding errors. Every one of them aborts the current batch.

from __future__ import annotations


class ForwarderError(Exception):
    """Base class for errors that fail a forwarding invocation."""


class ConfigurationError(ForwarderError):
    """Missing destination or unsupported encoding method."""


class TLSBuildError(ForwarderError):
    """Client certificate and private key do not form a usable key pair."""


class BuildError(ForwarderError):
    """Outbound request could not be assembled."""


class FetchError(ForwarderError):
    """
    Raised when an object cannot be read from S3.

    Attributes:
        bucket: Bucket the object was requested from.
        key:    Object key that was requested.
    """

    def __init__(self, *, bucket: str, key: str, reason: str) -> None:
        self.bucket = bucket
        self.key = key
        super().__init__(f"error fetching s3 object s3://{bucket}/{key}: {reason}")


class TransportError(ForwarderError):
    """Network-level failure while sending the outbound request."""

    def __init__(self, *, url: str, reason: str) -> None:
        self.url = url
        super().__init__(f"error making http call to {url}: {reason}")


class UpstreamStatusError(ForwarderError):
    """
    Raised when the collector answers with a 4xx or 5xx status.

    Attributes:
        status_code:   HTTP status returned by the collector.
        response_body: Response body text, empty when it could not be read.
    """

    def __init__(self, *, status_code: int, response_body: str) -> None:
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(
            f"http response was not successful. Status code: {status_code}, Response Body: {response_body}"
        )
