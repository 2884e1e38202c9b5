"""Route JSON-RPC requests to built-in protocol methods or to the tool executor."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Callable, Awaitable

import orjson

from cart_relay.tools.executor import ToolExecutor
from cart_relay.state.envelope import RequestEnvelope
from cart_relay.state.operation import OperationResult
from cart_relay.config.jsonrpc import (
    METHOD_PING,
    SERVER_NAME,
    SERVER_VERSION,
    METHOD_TOOLS_CALL,
    METHOD_INITIALIZE,
    METHOD_TOOLS_LIST,
    RPC_INVALID_PARAMS,
    METHOD_PROMPTS_LIST,
    MCP_PROTOCOL_VERSION,
    RPC_METHOD_NOT_FOUND,
    METHOD_RESOURCES_LIST,
    METHOD_RESOURCE_TEMPLATES_LIST,
)

from .envelope import build_error, build_result

logger = logging.getLogger(__name__)

HandlerFn = Callable[[RequestEnvelope], Awaitable[dict[str, Any]]]


def tool_result_content(result: OperationResult) -> dict[str, Any]:
    """Wrap a driver result as MCP tool output.

    The protocol call succeeded even when the product operation did not;
    `isError` carries the latter.
    """
    text = orjson.dumps(result.to_dict(), option=orjson.OPT_INDENT_2).decode("utf-8")
    return {"content": [{"type": "text", "text": text}], "isError": not result.success}


class ProtocolDispatcher:
    """Stateless between messages; one envelope in, one response envelope out."""

    def __init__(self, executor: ToolExecutor) -> None:
        self._executor = executor
        self._handlers: dict[str, HandlerFn] = {
            METHOD_INITIALIZE: self._handle_initialize,
            METHOD_PING: self._handle_ping,
            METHOD_TOOLS_LIST: self._handle_tools_list,
            METHOD_RESOURCES_LIST: self._handle_resources_list,
            METHOD_RESOURCE_TEMPLATES_LIST: self._handle_resource_templates_list,
            METHOD_PROMPTS_LIST: self._handle_prompts_list,
            METHOD_TOOLS_CALL: self._handle_tools_call,
        }

    async def dispatch(self, request: RequestEnvelope) -> dict[str, Any] | None:
        """Return the response envelope, or None for notifications."""
        if request.is_notification:
            logger.info("rpc: notification %s", request.method)
            return None

        handler = self._handlers.get(request.method)
        if handler is None:
            logger.info("rpc: method not found %s", request.method)
            return build_error(request.id, RPC_METHOD_NOT_FOUND, f"Method not found: {request.method}")
        return await handler(request)

    async def _handle_initialize(self, request: RequestEnvelope) -> dict[str, Any]:
        return build_result(
            request.id,
            {
                "protocolVersion": MCP_PROTOCOL_VERSION,
                "capabilities": {"tools": {}, "resources": {}, "prompts": {}},
                "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
            },
        )

    async def _handle_ping(self, request: RequestEnvelope) -> dict[str, Any]:
        return build_result(request.id, {})

    async def _handle_tools_list(self, request: RequestEnvelope) -> dict[str, Any]:
        return build_result(request.id, {"tools": self._executor.registry.descriptors()})

    async def _handle_resources_list(self, request: RequestEnvelope) -> dict[str, Any]:
        return build_result(request.id, {"resources": []})

    async def _handle_resource_templates_list(self, request: RequestEnvelope) -> dict[str, Any]:
        return build_result(request.id, {"resourceTemplates": []})

    async def _handle_prompts_list(self, request: RequestEnvelope) -> dict[str, Any]:
        return build_result(request.id, {"prompts": []})

    async def _handle_tools_call(self, request: RequestEnvelope) -> dict[str, Any]:
        name = request.params.get("name")
        if not isinstance(name, str) or not name.strip():
            return build_error(request.id, RPC_INVALID_PARAMS, "Invalid params: tools/call requires a tool name")
        result = await self._executor.execute(name.strip(), request.params.get("arguments"))
        return build_result(request.id, tool_result_content(result))


__all__ = ["ProtocolDispatcher", "tool_result_content"]
