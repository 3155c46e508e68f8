# Copyright 2025 Loopper-AI
# Shared fixtures

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

REGION = "us-east-1"


@dataclass
class PemKeyPair:
    cert: str
    key: str


def _make_key_pair(common_name: str) -> PemKeyPair:
    """Self-signed CA-capable certificate plus its private key, PEM encoded."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.now(timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(minutes=5))
        .not_valid_after(now + timedelta(days=1))
        .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
        .sign(key, hashes.SHA256())
    )
    return PemKeyPair(
        cert=cert.public_bytes(serialization.Encoding.PEM).decode(),
        key=key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        ).decode(),
    )


# RSA generation is slow; mint once per test session.
_CLIENT_PAIR = _make_key_pair("collector-client")
_OTHER_PAIR = _make_key_pair("someone-else")


@pytest.fixture
def client_pair() -> PemKeyPair:
    return _CLIENT_PAIR


@pytest.fixture
def other_pair() -> PemKeyPair:
    return _OTHER_PAIR


@pytest.fixture
def aws_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set minimal AWS env vars required by boto3 and moto."""
    monkeypatch.setenv("AWS_REGION", REGION)
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")


def make_s3_record(
    key: str = "test-key",
    bucket: str = "test-bucket",
    source: str = "test-source",
    event_time: str | None = "2024-03-01T12:30:45.000Z",
) -> dict:
    """Build one entry of an S3 notification's Records list."""
    record = {
        "eventVersion": "2.1",
        "eventSource": source,
        "awsRegion": REGION,
        "eventName": "ObjectCreated:Put",
        "s3": {
            "bucket": {"name": bucket, "arn": f"arn:aws:s3:::{bucket}"},
            "object": {"key": key, "size": 10},
        },
    }
    if event_time is not None:
        record["eventTime"] = event_time
    return record


def make_s3_event(*records: dict) -> dict:
    return {"Records": list(records) if records else [make_s3_record()]}


def make_context(request_id: str = "test-req-001") -> MagicMock:
    ctx = MagicMock()
    ctx.aws_request_id = request_id
    return ctx


def make_urlopen_response(status: int = 200, body: bytes = b'{"text":"Success","code":0}') -> MagicMock:
    resp = MagicMock()
    resp.getcode.return_value = status
    resp.read.return_value = body
    resp.__enter__ = MagicMock(return_value=resp)
    resp.__exit__ = MagicMock(return_value=False)
    return resp


def decode_envelope(body: bytes) -> dict:
    return json.loads(body.decode("utf-8"))
