"""Chat routes for case threads, messages and quick actions."""

from fastapi import APIRouter, HTTPException, Depends, Query
from fastapi.responses import PlainTextResponse
from typing import Dict
from middleware.auth import require_auth
from models.chat import AddMessageRequest, ChatStats, CreateThreadRequest, QuickActionRequest
from services.chat_service import (
    create_thread,
    get_thread_by_id,
    get_threads_by_case,
    get_messages_by_thread,
    add_message,
    get_chat_stats,
    export_thread_to_markdown
)
from services.errors import ChatServiceError, QuickActionError
from services.quick_actions import resolve_action_type, run_quick_action

router = APIRouter()


def _require_thread(thread_id: str) -> Dict:
    thread = get_thread_by_id(thread_id)
    if not thread:
        raise HTTPException(status_code=404, detail="Thread not found")
    return thread


@router.post("/threads")
def create_case_thread(request: CreateThreadRequest, user: Dict = Depends(require_auth)):
    """Create a conversation thread for a case."""
    try:
        thread = create_thread(
            numero_cnj=request.numero_cnj,
            context_type=request.context_type,
            properties=request.properties.model_dump(exclude_none=True)
        )

        return {
            "success": True,
            "thread": thread
        }

    except ChatServiceError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/threads")
def list_case_threads(
    user: Dict = Depends(require_auth),
    numero_cnj: str = Query(..., description="CNJ number of the case")
):
    """Get the threads of a case, most recently active first."""
    try:
        return {
            "threads": get_threads_by_case(numero_cnj)
        }

    except ChatServiceError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/threads/{thread_id}/messages")
def list_thread_messages(thread_id: str, user: Dict = Depends(require_auth)):
    try:
        _require_thread(thread_id)
        return {
            "messages": get_messages_by_thread(thread_id)
        }

    except ChatServiceError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/threads/{thread_id}/messages")
def post_thread_message(
    thread_id: str,
    request: AddMessageRequest,
    user: Dict = Depends(require_auth)
):
    """Append a message to a thread."""
    try:
        _require_thread(thread_id)

        attachments = None
        if request.attachments:
            attachments = [attachment.model_dump() for attachment in request.attachments]

        message = add_message(
            thread_id=thread_id,
            role=request.role.value,
            content=request.content,
            metadata=request.metadata,
            attachments=attachments
        )

        return {
            "success": True,
            "message": message
        }

    except ChatServiceError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/threads/{thread_id}/quick-actions")
def execute_quick_action(
    thread_id: str,
    request: QuickActionRequest,
    user: Dict = Depends(require_auth)
):
    """
    Run a quick action from the chat. The thread always receives an audit
    message, even when the action itself fails.
    """
    try:
        thread = _require_thread(thread_id)
        numero_cnj = request.numero_cnj or thread.get("numero_cnj")

        record = run_quick_action(
            request.action_type,
            request.content.strip(),
            thread_id,
            numero_cnj=numero_cnj
        )

        return {
            "success": True,
            "action_type": resolve_action_type(request.action_type).value,
            "record": record
        }

    except QuickActionError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except ChatServiceError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/threads/{thread_id}/export", response_class=PlainTextResponse)
def export_thread(thread_id: str, user: Dict = Depends(require_auth)):
    """Export a thread's history as markdown."""
    try:
        _require_thread(thread_id)
        return PlainTextResponse(
            export_thread_to_markdown(thread_id),
            media_type="text/markdown"
        )

    except ChatServiceError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/stats", response_model=ChatStats)
def chat_stats(
    user: Dict = Depends(require_auth),
    numero_cnj: str = Query(..., description="CNJ number of the case")
):
    """Usage statistics of the chat for a case."""
    try:
        return get_chat_stats(numero_cnj)

    except ChatServiceError as e:
        raise HTTPException(status_code=500, detail=str(e))
