"""Quick actions triggered from a case chat thread.

Each action performs a single write against the LegalFlow schema, then
records the attempt as a system message on the thread. The audit message is
written whether or not the primary write succeeded; a failed primary write
is raised to the caller only after the audit message is in place.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any, Union
from models.chat import QUICK_ACTION_IDS, QuickActionType
from services import database
from services.chat_service import log_quick_action
from services.errors import QuickActionError

logger = logging.getLogger(__name__)

DEFAULT_TASK_DUE_DAYS = 7


def _now() -> datetime:
    return datetime.now(timezone.utc)


def resolve_action_type(action: Union[QuickActionType, str]) -> QuickActionType:
    """Accept an action type (CREATE_TASK) or a chat UI id (criar_tarefa)."""
    if isinstance(action, QuickActionType):
        return action
    if action in QUICK_ACTION_IDS:
        return QUICK_ACTION_IDS[action]
    return QuickActionType(action)


def _chat_metadata(thread_id: str, **flags) -> Dict[str, Any]:
    return {
        "created_via": "chat",
        "thread_id": thread_id,
        "quick_action": True,
        **flags
    }


def _insert_activity(activity: Dict[str, Any]) -> Dict[str, Any]:
    response = database.legalflow_table("activities").insert(activity).execute()
    if not response.data:
        raise RuntimeError("Failed to create activity")
    return response.data[0]


def create_task(content: str, thread_id: str, numero_cnj: Optional[str]) -> Dict[str, Any]:
    return _insert_activity({
        "numero_cnj": numero_cnj,
        "title": "Tarefa criada via chat",
        "description": content,
        "status": "pending",
        "due_at": (_now() + timedelta(days=DEFAULT_TASK_DUE_DAYS)).isoformat(),
        "metadata": _chat_metadata(thread_id)
    })


def link_ticket(content: str, thread_id: str, numero_cnj: Optional[str]) -> Dict[str, Any]:
    response = database.legalflow_table("ticket_threads").insert({
        "thread_link_id": thread_id,
        "created_at": _now().isoformat()
    }).execute()
    if not response.data:
        raise RuntimeError("Failed to link ticket")
    return response.data[0]


def request_document(content: str, thread_id: str, numero_cnj: Optional[str]) -> Dict[str, Any]:
    return _insert_activity({
        "numero_cnj": numero_cnj,
        "title": "Solicitação de documento",
        "description": content,
        "status": "pending",
        "activity_type": "document_request",
        "metadata": _chat_metadata(thread_id, document_request=True)
    })


def complete_step(content: str, thread_id: str, numero_cnj: Optional[str]) -> Dict[str, Any]:
    return _insert_activity({
        "numero_cnj": numero_cnj,
        "title": "Etapa concluída",
        "description": content,
        "status": "completed",
        "completed_at": _now().isoformat(),
        "metadata": _chat_metadata(thread_id, step_completion=True)
    })


QUICK_ACTION_HANDLERS = {
    QuickActionType.CREATE_TASK: create_task,
    QuickActionType.LINK_TICKET: link_ticket,
    QuickActionType.REQUEST_DOCUMENT: request_document,
    QuickActionType.COMPLETE_STEP: complete_step,
}


def run_quick_action(
    action_type: Union[QuickActionType, str],
    content: str,
    thread_id: str,
    numero_cnj: Optional[str] = None
) -> Dict[str, Any]:
    """
    Run one quick action and write its audit message.

    Returns the persisted record. Raises QuickActionError when the primary
    write fails; any error from the audit write propagates as is.
    """
    action_name = getattr(action_type, "value", action_type)
    result = None
    error: Optional[Exception] = None

    try:
        action = resolve_action_type(action_type)
        action_name = action.value
        result = QUICK_ACTION_HANDLERS[action](content, thread_id, numero_cnj)
        logger.info("Quick action %s executed on thread %s", action_name, thread_id)
    except Exception as e:
        logger.warning("Quick action %s failed on thread %s: %s", action_name, thread_id, e)
        error = e

    log_quick_action(thread_id, action_name, content, result)

    if error is not None:
        raise QuickActionError(action_name, str(error)) from error

    return result
