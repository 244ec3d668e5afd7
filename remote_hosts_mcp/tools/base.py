"""Shared context, argument parsing and catalog helpers for the tool handlers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from ..errors import InvalidArguments
from ..gateway import BackendGateway
from ..resolver import SessionResolver
from ..state import ActiveTerminalContext


class ToolName(str, Enum):
    ADD_HOST = "add_host"
    HOSTS = "hosts"
    TERMINAL_SESSIONS = "terminal_sessions"
    NEW_TERMINAL = "new_terminal"
    TERMINAL_SEND = "terminal_send"
    TERMINAL_READ = "terminal_read"
    SET_ACTIVE_TERMINAL = "set_active_terminal"
    SEND = "send"
    READ = "read"


@dataclass
class ToolContext:
    """Everything a handler may touch.

    `terminal` is the only mutable state; handlers reach it through this
    object rather than a module global.
    """

    gateway: BackendGateway
    resolver: SessionResolver
    terminal: ActiveTerminalContext


Handler = Callable[[ToolContext, Dict[str, Any]], Awaitable[str]]

ArgsT = TypeVar("ArgsT", bound="ToolArgs")


class ToolArgs(BaseModel):
    """Base for per-tool argument models. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")


def parse_args(tool: ToolName, model: Type[ArgsT], args: Optional[Dict[str, Any]]) -> ArgsT:
    try:
        return model.model_validate(args or {})
    except ValidationError as e:
        raise InvalidArguments(tool.value, _summarize(e)) from e


def _summarize(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "arguments"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def _clean_schema(node: Any) -> Any:
    # Drop pydantic titles and render Optional[X] as plain X.
    if isinstance(node, list):
        return [_clean_schema(v) for v in node]
    if not isinstance(node, dict):
        return node

    out: Dict[str, Any] = {}
    for key, value in node.items():
        if key == "title":
            continue
        if key == "properties":
            out[key] = {name: _clean_schema(prop) for name, prop in value.items()}
            continue
        out[key] = _clean_schema(value)

    variants = out.get("anyOf")
    if isinstance(variants, list):
        non_null = [v for v in variants if v.get("type") != "null"]
        if len(non_null) == 1 and len(non_null) < len(variants):
            del out["anyOf"]
            out.update(non_null[0])
    if "default" in out and out["default"] is None:
        del out["default"]
    return out


def input_schema(model: Type[ToolArgs]) -> Dict[str, Any]:
    """JSON schema advertised for a tool, generated from its argument model."""
    schema = _clean_schema(model.model_json_schema())
    schema.setdefault("properties", {})
    schema["type"] = "object"
    return schema


def tool_info(name: ToolName, description: str, model: Type[ToolArgs]) -> Dict[str, Any]:
    return {
        "name": name.value,
        "description": description,
        "input_schema": input_schema(model),
    }
