from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class ContentBlock(BaseModel):
    """MCP content block."""
    type: Literal["text"] = "text"
    text: str


class ToolCallResult(BaseModel):
    """Uniform result of a tool invocation: one text block, error flag on failure."""

    content: List[ContentBlock]
    is_error: bool = False

    @classmethod
    def ok(cls, text: str) -> "ToolCallResult":
        return cls(content=[ContentBlock(text=text)])

    @classmethod
    def error(cls, text: str) -> "ToolCallResult":
        return cls(content=[ContentBlock(text=text)], is_error=True)

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)

    def to_mcp(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"content": [block.model_dump() for block in self.content]}
        if self.is_error:
            out["isError"] = True
        return out


class ToolInfo(BaseModel):
    name: str
    description: str
    input_schema: Dict[str, Any]

    def to_mcp(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


class ToolsListResponse(BaseModel):
    tools: List[ToolInfo]


class ToolCallRequest(BaseModel):
    tool: str
    args: Dict[str, Any] = Field(default_factory=dict)


class ToolCallError(BaseModel):
    code: str
    message: str


class ToolCallResponse(BaseModel):
    status: Literal["ok", "error"]
    content: Optional[List[ContentBlock]] = Field(
        default=None,
        description="MCP-compatible content blocks for rich client rendering"
    )
    error: Optional[ToolCallError] = None
    meta: Dict[str, Any] = Field(default_factory=dict)


class MCPMetadata(BaseModel):
    """MCP platform metadata endpoint response."""
    protocol_version: str
    server_name: str
    server_version: str
    api_base: str
    capabilities: List[str] = Field(default_factory=lambda: ["tools", "logging"])
    description: str = "Bridge from MCP tools to the remote hosts terminal control API."
