# Copyright 2025 Loopper-AI
# Configuration management for the S3 forwarder

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass

from .exceptions import ConfigurationError
from .utils import get_env_flag, get_env_value_or_default

DESTINATION_ENV_KEY = "EDGE_PROCESSOR_HOST"
TLS_CLIENT_CERT_ENV_KEY = "TLS_CLIENT_CERT"
TLS_CLIENT_KEY_ENV_KEY = "TLS_CLIENT_KEY"
TLS_CA_CERT_ENV_KEY = "TLS_CLIENT_CA_CERT"
ENCODING_METHOD_ENV_KEY = "ENCODING_METHOD"
SOURCETYPE_ENV_KEY = "EVENT_SOURCETYPE"
INDEX_ENV_KEY = "EVENT_INDEX"
EVENT_IS_RAW_ENV_KEY = "EVENT_IS_RAW"
REQUEST_TIMEOUT_ENV_KEY = "REQUEST_TIMEOUT"

DEFAULT_SOURCETYPE = "archived_data"
DEFAULT_INDEX = "main"
GZIP_ENCODING = "gzip"


def _parse_timeout(raw: str | None) -> float | None:
    """Seconds as a positive finite number, or None when unset."""
    value = (raw or "").strip()
    if not value:
        return None
    try:
        timeout = float(value)
    except ValueError:
        timeout = math.nan
    if not math.isfinite(timeout) or timeout <= 0:
        raise ConfigurationError(f"{REQUEST_TIMEOUT_ENV_KEY}={raw!r} is not a positive number of seconds")
    return timeout


@dataclass(frozen=True)
class ForwardingConfig:
    """Immutable configuration from environment variables, loaded once per invocation."""

    destination: str
    is_raw: bool = False
    sourcetype: str = DEFAULT_SOURCETYPE
    index: str = DEFAULT_INDEX
    encoding_method: str = ""
    tls_client_cert: str = ""
    tls_client_key: str = ""
    tls_ca_cert: str = ""
    request_timeout: float | None = None
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> ForwardingConfig:
        env = os.environ if environ is None else environ
        return cls(
            destination=(env.get(DESTINATION_ENV_KEY) or "").strip(),
            is_raw=get_env_flag(env, EVENT_IS_RAW_ENV_KEY),
            sourcetype=get_env_value_or_default(env, SOURCETYPE_ENV_KEY, DEFAULT_SOURCETYPE),
            index=get_env_value_or_default(env, INDEX_ENV_KEY, DEFAULT_INDEX),
            encoding_method=env.get(ENCODING_METHOD_ENV_KEY, ""),
            tls_client_cert=env.get(TLS_CLIENT_CERT_ENV_KEY, ""),
            tls_client_key=env.get(TLS_CLIENT_KEY_ENV_KEY, ""),
            tls_ca_cert=env.get(TLS_CA_CERT_ENV_KEY, ""),
            request_timeout=_parse_timeout(env.get(REQUEST_TIMEOUT_ENV_KEY)),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def has_client_certificate(self) -> bool:
        return bool(self.tls_client_cert and self.tls_client_key)

    def validate(self) -> tuple[bool, str | None]:
        if not self.destination:
            return False, f"{DESTINATION_ENV_KEY} has not been provided"
        if self.encoding_method and self.encoding_method != GZIP_ENCODING:
            return False, f"{self.encoding_method} is not supported. Only GZIP is supported"
        return True, None
