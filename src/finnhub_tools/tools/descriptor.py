"""Declarative tool descriptors.

A ToolDescriptor is all that distinguishes one Finnhub endpoint tool from
another: its name, its description, the API path it calls and the ordered
parameters it forwards as query-string entries. The generic RestTool does the
rest.
"""
from typing import Any, Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ParameterSpec(BaseModel):
    """One caller argument forwarded as a query parameter.

    Values are treated as strings on the wire; any scalar the caller sends is
    stringified by the parameter binder.
    """
    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1)
    required: bool = False
    description: str = ""


class ToolDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    description: str
    path: str = Field(..., pattern=r"^/")
    parameters: Tuple[ParameterSpec, ...] = ()

    @model_validator(mode="after")
    def _unique_keys(self) -> "ToolDescriptor":
        seen = set()
        for param in self.parameters:
            if param.key in seen:
                raise ValueError(f"duplicate parameter key {param.key!r} in tool {self.name!r}")
            seen.add(param.key)
        return self

    @property
    def required_keys(self) -> Tuple[str, ...]:
        return tuple(p.key for p in self.parameters if p.required)

    def input_schema(self) -> Dict[str, Any]:
        """JSON Schema for the arguments object, properties in declared order.

        Required-ness is declared here for the hosting framework to enforce;
        the adapter itself does not check it.
        """
        properties = {
            p.key: {"type": "string", "description": p.description}
            for p in self.parameters
        }
        return {
            "type": "object",
            "properties": properties,
            "required": list(self.required_keys),
        }
