# Copyright 2025 Loopper-AI
# Forwarding services

from .dispatcher import Dispatcher
from .request_builder import RequestBuilder
from .response_classifier import classify_response, is_failure_status

__all__ = ["Dispatcher", "RequestBuilder", "classify_response", "is_failure_status"]
