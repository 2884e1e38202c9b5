"""Secrets and authentication configuration."""

from __future__ import annotations

ENV_AUTH_TOKEN = "AUTH_TOKEN"

# Header scheme and query parameter accepted for the shared secret.
AUTH_BEARER_PREFIX = "bearer "
AUTH_QUERY_PARAM = "token"

__all__ = ["AUTH_BEARER_PREFIX", "AUTH_QUERY_PARAM", "ENV_AUTH_TOKEN"]
