"""Shared-secret authentication for every HTTP endpoint."""

from __future__ import annotations

import logging
import secrets

from fastapi import Request, HTTPException

from cart_relay.config.secrets import AUTH_QUERY_PARAM, AUTH_BEARER_PREFIX

logger = logging.getLogger(__name__)


def get_provided_token(request: Request) -> str:
    header = (request.headers.get("authorization") or "").strip()
    if header.lower().startswith(AUTH_BEARER_PREFIX):
        token = header[len(AUTH_BEARER_PREFIX) :].strip()
        if token:
            return token
    # Some MCP clients can only put the secret in the URL.
    return (request.query_params.get(AUTH_QUERY_PARAM) or "").strip()


def validate_token(provided: str, expected: str) -> bool:
    if not expected:
        # No AUTH_TOKEN configured: the relay is open to anyone who can reach it.
        return True
    return secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


async def require_auth(request: Request) -> None:
    deps = getattr(request.app.state, "runtime_deps", None)
    if deps is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    if not validate_token(get_provided_token(request), deps.settings.auth.token):
        logger.info("auth: rejected %s %s", request.method, request.url.path)
        raise HTTPException(status_code=401, detail="Unauthorized")


__all__ = ["get_provided_token", "require_auth", "validate_token"]
