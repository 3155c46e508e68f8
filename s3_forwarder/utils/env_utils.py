# Copyright 2025 Loopper-AI
# Environment lookup helpers

from __future__ import annotations

from collections.abc import Mapping


def get_env_value_or_default(environ: Mapping[str, str], key: str, default: str) -> str:
    """Return environ[key], or default when the variable is unset or empty."""
    return environ.get(key) or default


def get_env_flag(environ: Mapping[str, str], key: str) -> bool:
    # Only a literal "true" (any case) enables a flag
    return (environ.get(key) or "").strip().lower() == "true"
