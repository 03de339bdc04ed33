from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

class ToolInfo(BaseModel):
    name: str
    description: str
    inputSchema: Dict[str, Any]

class ToolListResponse(BaseModel):
    tools: List[ToolInfo]

class InvokeRequest(BaseModel):
    # Left untyped so a non-object payload reaches the tool and is rejected there
    arguments: Any = Field(default_factory=dict)

class TextContent(BaseModel):
    type: str = "text"
    text: str

class InvokeResponse(BaseModel):
    tool: str
    content: List[TextContent]
    isError: bool
    trace_id: str
    error: Optional[Dict[str, Any]] = None
