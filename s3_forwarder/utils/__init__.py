# Copyright 2025 Loopper-AI
# Utility modules

from .env_utils import get_env_flag, get_env_value_or_default
from .host_utils import resolve_hostname

__all__ = ["get_env_flag", "get_env_value_or_default", "resolve_hostname"]
