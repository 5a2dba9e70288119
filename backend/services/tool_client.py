"""HTTP client that dispatches validated tool calls to the AdvogaAI tools API."""

import logging
import time
from functools import lru_cache
from typing import Any, Dict, Optional

import requests

from config import ToolsConfig
from models.tools import ToolDefinition, ToolRequest, ToolResponse
from services.errors import ToolError, ToolNotFoundError, ToolTransportError
from services.tool_catalog import get_tool_by_id
from services.tool_validator import ensure_valid_parameters

logger = logging.getLogger(__name__)


class ToolsClient:
    """
    Executes catalog tools against the remote tools API.

    Every call goes through the same steps: look the tool up, validate the
    parameters, POST them to the tool's endpoint and wrap the outcome in a
    ToolResponse. execute_tool never raises; failures come back with
    success=False and a message in `error`.

    There is no retry. Calls are unbounded unless a timeout is configured.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout: Optional[float] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: ToolsConfig) -> "ToolsClient":
        return cls(config.base_url, config.api_key, config.timeout_seconds)

    def execute_tool(self, request: ToolRequest) -> ToolResponse:
        """Validate and dispatch one tool invocation."""
        try:
            tool = get_tool_by_id(request.tool_id)
            if tool is None:
                raise ToolNotFoundError(request.tool_id)

            ensure_valid_parameters(tool, request.parameters)

            start = time.monotonic()
            data = self._post(tool, request)
            execution_time_ms = int((time.monotonic() - start) * 1000)

        except ToolError as e:
            logger.warning("Tool %s failed: %s", request.tool_id, e)
            return ToolResponse.failure(str(e))
        except Exception as e:
            logger.exception("Unexpected error executing tool %s", request.tool_id)
            return ToolResponse.failure(str(e) or "Unknown error")

        logger.info("Tool %s v%s succeeded in %dms", tool.id, tool.version, execution_time_ms)
        return ToolResponse(
            success=True,
            data=data,
            execution_time_ms=execution_time_ms,
            tool_version=tool.version
        )

    def _post(self, tool: ToolDefinition, request: ToolRequest) -> Any:
        """Send the call and return the decoded JSON body."""
        url = f"{self.base_url}{tool.endpoint}"
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
            "X-Tool-Version": tool.version,
        }

        body: Dict[str, Any] = {"parameters": request.parameters}
        if request.context is not None:
            body["context"] = request.context.model_dump(exclude_unset=True)

        try:
            response = requests.post(url, headers=headers, json=body, timeout=self.timeout)
        except requests.Timeout as e:
            if self.timeout is None:
                raise ToolTransportError(str(e) or "Request timed out") from e
            raise ToolTransportError(f"Request timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise ToolTransportError(str(e) or "Unknown error") from e

        if not 200 <= response.status_code < 300:
            raise ToolTransportError(
                f"HTTP {response.status_code}: {response.reason}",
                status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            raise ToolTransportError(f"Invalid JSON response: {e}") from e


@lru_cache(maxsize=1)
def get_tools_client() -> ToolsClient:
    """Process-wide client built from environment configuration."""
    return ToolsClient.from_config(ToolsConfig.from_environment())
