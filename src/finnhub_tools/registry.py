from __future__ import annotations
import time
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import requests

from .config import APIConfig
from .errors import ConfigurationError, StructuredError, ErrorCategory, ErrorSeverity
from .logging import get_logger
from .tools.base import Tool, ToolResult
from .tools.catalog import FINNHUB_TOOLS
from .tools.descriptor import ToolDescriptor
from .tools.rest import RestTool

log = get_logger("registry")


class UnknownToolError(StructuredError):
    """Raised (and surfaced as an error result) for an unregistered tool name."""

    def __init__(self, name: str):
        super().__init__(
            f"Unknown tool: {name}",
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.WARNING,
            retryable=False,
            details={"tool": name}
        )


@dataclass
class Invocation:
    tool: str
    result: ToolResult
    elapsed_ms: float


class ToolRegistry:
    """Name -> tool lookup exposed to the hosting tool-calling framework.

    Populated once at startup and read-only afterwards, so it can be shared
    between concurrent requests.
    """

    def __init__(self, tools: Iterable[Tool] = ()) -> None:
        self._tools: Dict[str, Tool] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: Tool) -> None:
        """Add a tool.

        Raises:
            ConfigurationError: If a tool with the same name is already registered
        """
        if tool.name in self._tools:
            raise ConfigurationError(
                f"Duplicate tool name: {tool.name}",
                details={"tool": tool.name}
            )
        self._tools[tool.name] = tool

    def get(self, name: str) -> Optional[Tool]:
        return self._tools.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def names(self) -> List[str]:
        return list(self._tools)

    def list_tools(self) -> List[Dict[str, Any]]:
        """Tool listing entries: name, description and JSON input schema."""
        return [
            {
                "name": tool.name,
                "description": tool.description,
                "inputSchema": tool.input_schema(),
            }
            for tool in self._tools.values()
        ]

    def invoke(
        self,
        name: str,
        arguments: Any,
        correlation_id: str | None = None
    ) -> ToolResult:
        return self.handle(name, arguments, correlation_id=correlation_id).result

    def handle(
        self,
        name: str,
        arguments: Any,
        correlation_id: str | None = None
    ) -> Invocation:
        """Invoke a tool by name and time the call.

        Args:
            name: Registered tool name
            arguments: Caller-supplied arguments object
            correlation_id: Optional correlation ID for tracing. Auto-generates UUID if not provided.

        Returns:
            Invocation with tool name, result and elapsed time. Unknown tool
            names produce an error result rather than an exception.
        """
        if correlation_id is None:
            correlation_id = str(uuid.uuid4())

        start = time.perf_counter()
        tool = self._tools.get(name)
        if tool is None:
            log.warning("unknown tool=%s correlation_id=%s", name, correlation_id)
            res = ToolResult.failure(UnknownToolError(name))
        else:
            res = tool.run(arguments, correlation_id=correlation_id)
        elapsed = (time.perf_counter() - start) * 1000
        return Invocation(tool=name, result=res, elapsed_ms=elapsed)


def build_registry(
    config: APIConfig,
    session: Optional[requests.Session] = None,
    descriptors: Iterable[ToolDescriptor] = FINNHUB_TOOLS
) -> ToolRegistry:
    """Create a RestTool per descriptor, all sharing one HTTP session."""
    shared = session or requests.Session()
    return ToolRegistry(RestTool(d, config, session=shared) for d in descriptors)
