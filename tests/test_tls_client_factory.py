# Copyright 2025 Loopper-AI
# Tests for TLSClientFactory

from __future__ import annotations

import ssl
from unittest.mock import MagicMock, patch

import pytest

from s3_forwarder.clients import HttpClient, TLSClientFactory
from s3_forwarder.config import ForwardingConfig
from s3_forwarder.exceptions import TLSBuildError


def _config(**kwargs) -> ForwardingConfig:
    return ForwardingConfig(destination="https://localhost:8088", **kwargs)


def _assert_no_tls(client: HttpClient) -> None:
    assert isinstance(client, HttpClient)
    assert client.ssl_context is None
    assert client.client_certificate is None


class TestPlainTransport:
    def test_no_env_set(self):
        _assert_no_tls(TLSClientFactory.build(_config()))

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"tls_client_cert": "test-cert"},
            {"tls_client_key": "test-key"},
            {"tls_client_cert": "test-cert", "tls_client_key": ""},
            {"tls_ca_cert": "test-ca"},
        ],
        ids=["only-cert", "only-key", "empty-key", "only-ca"],
    )
    def test_partial_env_set(self, kwargs):
        _assert_no_tls(TLSClientFactory.build(_config(**kwargs)))

    def test_timeout_is_carried(self):
        client = TLSClientFactory.build(_config(request_timeout=5.0))
        assert client.timeout == 5.0


class TestMutualTLS:
    def test_env_set_has_tls(self, client_pair):
        config = _config(tls_client_cert=client_pair.cert, tls_client_key=client_pair.key, tls_ca_cert=client_pair.cert)

        client = TLSClientFactory.build(config)

        assert isinstance(client.ssl_context, ssl.SSLContext)
        assert client.client_certificate == client_pair.cert
        assert client.ssl_context.verify_mode == ssl.CERT_REQUIRED
        assert client.ssl_context.check_hostname is True
        assert client.ssl_context.cert_store_stats()["x509_ca"] >= 1

    def test_without_ca(self, client_pair):
        client = TLSClientFactory.build(_config(tls_client_cert=client_pair.cert, tls_client_key=client_pair.key))

        assert client.ssl_context is not None
        assert client.client_certificate == client_pair.cert

    def test_malformed_ca_is_ignored(self, client_pair):
        """Intentional leniency: an unparseable CA does not fail the build."""
        config = _config(tls_client_cert=client_pair.cert, tls_client_key=client_pair.key, tls_ca_cert="not-a-ca")

        client = TLSClientFactory.build(config)

        assert client.ssl_context is not None
        assert client.client_certificate == client_pair.cert

    def test_system_trust_store_unavailable(self, client_pair):
        with patch.object(ssl.SSLContext, "load_default_certs", side_effect=ssl.SSLError("no store")):
            client = TLSClientFactory.build(_config(tls_client_cert=client_pair.cert, tls_client_key=client_pair.key))

        assert client.ssl_context is not None

    def test_mismatched_key_pair(self, client_pair, other_pair):
        config = _config(tls_client_cert=client_pair.cert, tls_client_key=other_pair.key)

        with pytest.raises(TLSBuildError):
            TLSClientFactory.build(config)

    def test_garbage_key_pair(self):
        with pytest.raises(TLSBuildError):
            TLSClientFactory.build(_config(tls_client_cert="test-cert", tls_client_key="test-key"))

    def test_temp_files_removed(self, client_pair, tmp_path, monkeypatch):
        monkeypatch.setattr("tempfile.tempdir", str(tmp_path))

        TLSClientFactory.build(_config(tls_client_cert=client_pair.cert, tls_client_key=client_pair.key))

        assert list(tmp_path.iterdir()) == []

    def test_temp_files_removed_when_key_write_fails(self, client_pair, tmp_path, monkeypatch):
        from s3_forwarder.clients import tls_client_factory

        monkeypatch.setattr("tempfile.tempdir", str(tmp_path))
        real_write = tls_client_factory._write_pem
        writes = iter([real_write, MagicMock(side_effect=OSError("disk full"))])
        monkeypatch.setattr(tls_client_factory, "_write_pem", lambda content: next(writes)(content))

        with pytest.raises(TLSBuildError, match="disk full"):
            TLSClientFactory.build(_config(tls_client_cert=client_pair.cert, tls_client_key=client_pair.key))

        assert list(tmp_path.iterdir()) == []
