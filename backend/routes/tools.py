"""Tool routes for browsing the catalog and running tools."""

import logging
from fastapi import APIRouter, HTTPException, Depends, Query
from typing import Dict, Optional
from middleware.auth import require_auth
from models.tools import ToolCategory, ToolRequest
from services.tool_catalog import (
    get_all_tools,
    get_tool_by_id,
    get_tools_by_category,
    get_categories
)
from services.tool_client import ToolsClient, get_tools_client

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/")
def list_tools(
    user: Dict = Depends(require_auth),
    category: Optional[ToolCategory] = Query(None, description="Filter by tool category")
):
    """List the available tools, optionally filtered by category."""
    tools = get_tools_by_category(category) if category else get_all_tools()
    return {
        "tools": [tool.model_dump(mode="json") for tool in tools]
    }


@router.get("/categories")
def list_categories(user: Dict = Depends(require_auth)):
    """Categories that have at least one tool, in catalog order."""
    return {
        "categories": [category.value for category in get_categories()]
    }


@router.get("/{tool_id}")
def get_tool(tool_id: str, user: Dict = Depends(require_auth)):
    """Get a tool definition by id."""
    tool = get_tool_by_id(tool_id)
    if not tool:
        raise HTTPException(status_code=404, detail=f"Tool {tool_id} not found")

    return {
        "tool": tool.model_dump(mode="json")
    }


@router.post("/execute")
def execute_tool(
    request: ToolRequest,
    user: Dict = Depends(require_auth),
    client: ToolsClient = Depends(get_tools_client)
):
    """
    Run a tool. Always answers 200; failures are reported in the envelope
    with success=false and an error message.
    """
    logger.info("User %s executing tool %s", user["user_id"], request.tool_id)
    return client.execute_tool(request).envelope()
