"""Shared models for the AdvogaAI tool catalog, requests and responses."""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, Any, Optional, Tuple


class ToolCategory(str, Enum):
    PETITION = "peticion"
    ANALYSIS = "analysis"
    RESEARCH = "research"
    DOCUMENT = "document"
    TIMELINE = "timeline"
    CALCULATION = "calculation"


class ParameterType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"


class ParameterValidation(BaseModel):
    """Extra constraints on a parameter value."""
    model_config = ConfigDict(frozen=True)

    enum: Optional[Tuple[Any, ...]] = None


class ToolParameter(BaseModel):
    """One entry of a tool's parameter schema."""
    model_config = ConfigDict(frozen=True)

    name: str
    type: ParameterType
    required: bool
    description: str
    validation: Optional[ParameterValidation] = None


class ToolDefinition(BaseModel):
    """A catalog entry describing a remote tool."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    category: ToolCategory
    version: str
    endpoint: str
    parameters: Tuple[ToolParameter, ...]
    # Descriptive only, never enforced on responses
    response_format: Dict[str, str] = Field(default_factory=dict)


class ToolContext(BaseModel):
    """Correlation data forwarded verbatim to the tool endpoint."""
    model_config = ConfigDict(extra="allow")

    numero_cnj: Optional[str] = None
    cliente_cpfcnpj: Optional[str] = None
    thread_link_id: Optional[str] = None


class ToolRequest(BaseModel):
    """Standard request format for a tool invocation."""
    tool_id: str
    parameters: Dict[str, Any] = Field(default_factory=dict)
    context: Optional[ToolContext] = None


class ToolResponse(BaseModel):
    """Standard response format for all tool invocations."""
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    execution_time_ms: Optional[int] = None
    tool_version: Optional[str] = None

    @classmethod
    def failure(cls, error: str) -> "ToolResponse":
        return cls(success=False, error=error)

    def envelope(self) -> Dict[str, Any]:
        """JSON form: unset fields dropped, but `data` always present on success."""
        body = self.model_dump(exclude_none=True)
        if self.success:
            body["data"] = self.data
        return body
