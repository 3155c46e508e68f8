# Copyright 2025 Loopper-AI
# HTTP client for forwarding requests to the event collector

from __future__ import annotations

import http.client
import logging
import ssl
import urllib.error
import urllib.request

from ..exceptions import TransportError
from ..models import HttpResponse, OutboundRequest

logger = logging.getLogger(__name__)


def _read_error_body(exc: urllib.error.HTTPError) -> str:
    try:
        return exc.read().decode("utf-8", errors="replace")
    except (OSError, http.client.HTTPException) as e:
        logger.warning("Could not read error response body: %s", e)
        return ""


class HttpClient:
    """HTTP client for sending outbound requests to the collector.

    Built once per invocation and shared by every record in the batch.
    """

    def __init__(
        self,
        ssl_context: ssl.SSLContext | None = None,
        client_certificate: str | None = None,
        timeout: float | None = None,
    ):
        self.ssl_context = ssl_context
        self.client_certificate = client_certificate
        self.timeout = timeout

    def send(self, request: OutboundRequest) -> HttpResponse:
        """Send request and return its status and body.

        Note: urllib.request.urlopen raises HTTPError for non-2xx status codes.
        Those are returned as responses, not raised; deciding what counts as
        a failure is up to the caller.
        """
        req = urllib.request.Request(
            request.url,
            data=request.body,
            headers=request.headers,
            method=request.method,
        )

        try:
            with urllib.request.urlopen(req, timeout=self.timeout, context=self.ssl_context) as resp:
                code = resp.getcode()
                body = resp.read().decode("utf-8", errors="replace")
                return HttpResponse(status_code=code, body=body)

        except urllib.error.HTTPError as exc:
            return HttpResponse(status_code=exc.code, body=_read_error_body(exc))

        except urllib.error.URLError as exc:
            logger.error("URLError: url=%s reason=%s", request.url, exc.reason)
            raise TransportError(url=request.url, reason=str(exc.reason)) from exc

        except (OSError, http.client.HTTPException, ValueError) as exc:
            # ValueError: bad timeout or URL rejected by the socket layer
            logger.error("HTTP transport error: url=%s error=%s", request.url, exc)
            raise TransportError(url=request.url, reason=str(exc)) from exc
