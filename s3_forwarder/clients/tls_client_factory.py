# Copyright 2025 Loopper-AI
# Builds the outbound HTTP client, with mutual TLS when a client key pair is configured

from __future__ import annotations

import logging
import os
import ssl
import tempfile

from ..config import ForwardingConfig
from ..exceptions import TLSBuildError
from .http_client import HttpClient

logger = logging.getLogger(__name__)


def _write_pem(content: str) -> str:
    fd, path = tempfile.mkstemp(suffix=".pem")
    try:
        with os.fdopen(fd, "w") as fh:
            fh.write(content)
    except OSError:
        os.remove(path)
        raise
    return path


def _load_client_key_pair(context: ssl.SSLContext, cert_pem: str, key_pem: str) -> None:
    """Load an in-memory PEM key pair. ssl only reads key material from files."""
    paths: list[str] = []
    try:
        paths.append(_write_pem(cert_pem))
        paths.append(_write_pem(key_pem))
        context.load_cert_chain(certfile=paths[0], keyfile=paths[1])
    except OSError as e:
        # ssl.SSLError is an OSError; so are temp file write failures
        raise TLSBuildError(f"invalid TLS client certificate/key pair: {e}") from e
    finally:
        for path in paths:
            os.remove(path)


def _new_trust_store() -> ssl.SSLContext:
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    try:
        context.load_default_certs()
    except (ssl.SSLError, OSError) as e:
        # Fall back to an empty trust store
        logger.warning("System trust store unavailable: %s", e)
    return context


class TLSClientFactory:
    """Factory for the per-invocation HTTP client."""

    @staticmethod
    def build(config: ForwardingConfig) -> HttpClient:
        """
        Build the HTTP client for one invocation.

        Mutual TLS is enabled only when both TLS_CLIENT_CERT and TLS_CLIENT_KEY
        are set; otherwise a plain client is returned. A CA certificate that
        fails to parse is ignored rather than failing the build.

        Raises:
            TLSBuildError: certificate and key do not form a valid pair
        """
        if not config.has_client_certificate:
            logger.info("TLS client certificate not configured, using plain transport")
            return HttpClient(timeout=config.request_timeout)

        context = _new_trust_store()
        _load_client_key_pair(context, config.tls_client_cert, config.tls_client_key)

        if config.tls_ca_cert:
            try:
                context.load_verify_locations(cadata=config.tls_ca_cert)
            except (ssl.SSLError, ValueError) as e:
                logger.warning("Ignoring unparseable TLS CA certificate: %s", e)

        logger.info("Mutual TLS enabled for outbound transport")
        return HttpClient(
            ssl_context=context,
            client_certificate=config.tls_client_cert,
            timeout=config.request_timeout,
        )
