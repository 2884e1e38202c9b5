"""Tool catalog shared by discovery (tools/list) and invocation (tools/call)."""

from __future__ import annotations

from typing import Any
from collections.abc import Iterable

from cart_relay.errors import ToolArgumentsError
from cart_relay.state.tools import ToolSpec, ParamSpec


def _coerce(tool: str, spec: ParamSpec, value: Any) -> Any:
    if spec.type == "string":
        if not isinstance(value, str):
            raise ToolArgumentsError(tool, f"'{spec.name}' must be a string")
        value = value.strip()
    elif spec.type == "boolean":
        if not isinstance(value, bool):
            raise ToolArgumentsError(tool, f"'{spec.name}' must be a boolean")
    else:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ToolArgumentsError(tool, f"'{spec.name}' must be a {spec.type}")
        if spec.type == "integer":
            if isinstance(value, float) and not value.is_integer():
                raise ToolArgumentsError(tool, f"'{spec.name}' must be a whole number")
            value = int(value)
        if spec.minimum is not None and value < spec.minimum:
            raise ToolArgumentsError(tool, f"'{spec.name}' must be >= {spec.minimum:g}")
    return value


class ToolRegistry:
    def __init__(self, tools: Iterable[ToolSpec] = ()) -> None:
        self._tools: dict[str, ToolSpec] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: ToolSpec) -> None:
        if tool.name in self._tools:
            raise ValueError(f"tool {tool.name!r} is already registered")
        known = {p.name for p in tool.params}
        missing = [name for name in tool.exactly_one_of if name not in known]
        if missing:
            raise ValueError(f"tool {tool.name!r}: exactly_one_of names unknown params {missing}")
        self._tools[tool.name] = tool

    def get(self, name: str) -> ToolSpec | None:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def descriptors(self) -> list[dict[str, Any]]:
        return [tool.descriptor() for tool in self._tools.values()]

    def validate(self, name: str, arguments: Any) -> dict[str, Any]:
        """Check arguments against the declared schema and apply defaults.

        Empty strings count as "not supplied".
        """
        tool = self._tools.get(name)
        if tool is None:
            raise ToolArgumentsError(name, "unknown tool")
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise ToolArgumentsError(name, "arguments must be an object")

        params = {p.name: p for p in tool.params}
        unknown = sorted(set(arguments) - set(params))
        if unknown:
            raise ToolArgumentsError(name, f"unexpected arguments: {', '.join(unknown)}")

        out: dict[str, Any] = {}
        for spec in tool.params:
            value = arguments.get(spec.name)
            if value is not None:
                value = _coerce(name, spec, value)
            if value is None or value == "":
                if spec.required:
                    raise ToolArgumentsError(name, f"'{spec.name}' is required")
                if spec.default is not None:
                    out[spec.name] = spec.default
                continue
            out[spec.name] = value

        if tool.exactly_one_of:
            supplied = [p for p in tool.exactly_one_of if p in out]
            if len(supplied) != 1:
                raise ToolArgumentsError(name, f"provide exactly one of: {', '.join(tool.exactly_one_of)}")
        return out


__all__ = ["ToolRegistry"]
