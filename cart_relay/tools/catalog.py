"""The relay's tools. Handlers are dispatch shims onto the capability driver."""

from __future__ import annotations

from typing import Any

from cart_relay.state.operation import OperationResult
from cart_relay.state.tools import ToolSpec, ParamSpec, ToolContext

from .registry import ToolRegistry


async def _search_amazon(ctx: ToolContext, args: dict[str, Any]) -> OperationResult:
    return await ctx.driver.search(args["query"])


async def _add_to_cart(ctx: ToolContext, args: dict[str, Any]) -> OperationResult:
    return await ctx.driver.add_to_cart(
        asin=args.get("asin"),
        query=args.get("query"),
        quantity=args["quantity"],
    )


async def _view_cart(ctx: ToolContext, _args: dict[str, Any]) -> OperationResult:
    return await ctx.driver.view_cart()


async def _check_login(ctx: ToolContext, _args: dict[str, Any]) -> OperationResult:
    return await ctx.driver.check_login()


async def _save_session(ctx: ToolContext, _args: dict[str, Any]) -> OperationResult:
    if not await ctx.credentials.capture(ctx.driver):
        return OperationResult.failure("Failed to save Amazon session", "credential save failed; see server log")
    return OperationResult.ok(
        "Amazon session saved successfully. Your login will persist across server restarts.",
    )


TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec(
        name="search_amazon",
        description="Search for products on Amazon",
        handler=_search_amazon,
        params=(ParamSpec("query", "string", "Search query for Amazon products", required=True),),
    ),
    ToolSpec(
        name="add_to_cart",
        description="Add a product to Amazon cart",
        handler=_add_to_cart,
        params=(
            ParamSpec("query", "string", "Product name to search and add"),
            ParamSpec("asin", "string", "Amazon ASIN (product ID) - use this if known"),
            ParamSpec("quantity", "integer", "Quantity to add (default: 1)", default=1, minimum=1),
        ),
        exactly_one_of=("asin", "query"),
    ),
    ToolSpec(
        name="view_cart",
        description="View current Amazon cart contents",
        handler=_view_cart,
    ),
    ToolSpec(
        name="check_login",
        description="Check if logged into Amazon",
        handler=_check_login,
    ),
    ToolSpec(
        name="save_session",
        description=(
            "(Optional) Manually trigger session save. Sessions are automatically saved periodically, "
            "after operations, and on shutdown, so this is typically not needed."
        ),
        handler=_save_session,
        # The handler already saves.
        refreshes_credentials=False,
    ),
)


def build_tool_registry() -> ToolRegistry:
    return ToolRegistry(TOOLS)


__all__ = ["TOOLS", "build_tool_registry"]
