# Copyright 2025 Loopper-AI
# Local host name resolution

from __future__ import annotations

import logging
import socket

logger = logging.getLogger(__name__)

DEFAULT_HOST_NAME = "unknownHost"


def resolve_hostname() -> str:
    """Local host name, or DEFAULT_HOST_NAME when it cannot be determined."""
    try:
        host = socket.gethostname()
    except OSError as e:
        logger.warning("Hostname lookup failed, using %s: %s", DEFAULT_HOST_NAME, e)
        return DEFAULT_HOST_NAME
    return host or DEFAULT_HOST_NAME
