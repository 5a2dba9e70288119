"""Parameter validation against a tool's declared schema."""

from typing import Any, Callable, Dict, Optional
from models.tools import ParameterType, ToolDefinition
from services.errors import ToolValidationError


def _is_number(value: Any) -> bool:
    # bool is a subclass of int, but true/false is not a number here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_object(value: Any) -> bool:
    # Arrays never satisfy the object check
    return isinstance(value, dict) and not _is_array(value)


TYPE_CHECKS: Dict[ParameterType, Callable[[Any], bool]] = {
    ParameterType.STRING: lambda value: isinstance(value, str),
    ParameterType.NUMBER: _is_number,
    ParameterType.BOOLEAN: lambda value: isinstance(value, bool),
    ParameterType.ARRAY: _is_array,
    ParameterType.OBJECT: _is_object,
}

TYPE_LABELS = {
    ParameterType.STRING: "a string",
    ParameterType.NUMBER: "a number",
    ParameterType.BOOLEAN: "a boolean",
    ParameterType.ARRAY: "an array",
    ParameterType.OBJECT: "an object",
}


def validate_parameters(tool: ToolDefinition, parameters: Dict[str, Any]) -> Optional[str]:
    """
    Check a parameter map against the tool's schema.

    Required parameters are checked first, for every parameter in declared
    order; only then are the present values type- and enum-checked, again
    in declared order. The first failure wins. Keys the schema does not
    declare are ignored.

    Returns the error message, or None when the parameters are valid.
    """
    for param in tool.parameters:
        if param.required and param.name not in parameters:
            return f"Required parameter '{param.name}' is missing"

    for param in tool.parameters:
        if param.name not in parameters:
            continue

        value = parameters[param.name]

        if not TYPE_CHECKS[param.type](value):
            return f"Parameter '{param.name}' must be {TYPE_LABELS[param.type]}"

        allowed = param.validation.enum if param.validation else None
        if allowed is not None and value not in allowed:
            return f"Parameter '{param.name}' must be one of: {', '.join(str(v) for v in allowed)}"

    return None


def ensure_valid_parameters(tool: ToolDefinition, parameters: Dict[str, Any]) -> None:
    """Raise ToolValidationError if validate_parameters reports a problem."""
    error = validate_parameters(tool, parameters)
    if error:
        raise ToolValidationError(error)
