# Copyright 2025 Loopper-AI
# Client modules for external services

from .http_client import HttpClient
from .s3_client import S3Client
from .tls_client_factory import TLSClientFactory

__all__ = ["HttpClient", "S3Client", "TLSClientFactory"]
