from dataclasses import dataclass
from typing import Protocol, Any, Dict, Optional

from ..errors import StructuredError


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool invocation: either text or an error.

    Use ToolResult.ok() / ToolResult.failure() rather than the constructor.
    For error results, `text` holds the error message shown to the caller and
    `error` the structured error behind it.
    """
    text: str
    is_error: bool = False
    error: Optional[StructuredError] = None

    @classmethod
    def ok(cls, text: str) -> "ToolResult":
        return cls(text=text)

    @classmethod
    def failure(cls, error: StructuredError) -> "ToolResult":
        return cls(text=error.message, is_error=True, error=error)

    def to_content(self) -> Dict[str, Any]:
        """Render as an MCP-style CallToolResult payload."""
        return {
            "content": [{"type": "text", "text": self.text}],
            "isError": self.is_error,
        }


class Tool(Protocol):
    name: str
    description: str

    def input_schema(self) -> Dict[str, Any]:
        """JSON Schema describing the accepted arguments object."""
        ...

    def run(self, arguments: Any, correlation_id: str | None = None) -> ToolResult:
        """Execute the tool with the given arguments.

        Args:
            arguments: Caller-supplied arguments, expected to be a mapping
            correlation_id: Optional correlation ID for tracing. Auto-generates UUID if not provided.

        Returns:
            ToolResult with the formatted response or the error
        """
        ...
