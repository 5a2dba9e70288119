"""Error types raised by the tool and chat services."""

from typing import Optional


class ToolError(Exception):
    """Base class for failures of a tool invocation."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ToolNotFoundError(ToolError, LookupError):
    """The requested tool id is not in the catalog."""

    def __init__(self, tool_id: str):
        super().__init__(f"Tool {tool_id} not found")
        self.tool_id = tool_id


class ToolValidationError(ToolError, ValueError):
    """Parameters do not match the tool's declared schema."""


class ToolTransportError(ToolError):
    """The remote call failed or returned a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class QuickActionError(Exception):
    """The primary write of a quick action failed."""

    def __init__(self, action_type: str, message: str):
        super().__init__(f"Quick action {action_type} failed: {message}")
        self.action_type = action_type


class ChatServiceError(Exception):
    """A thread or message operation against the database failed."""
