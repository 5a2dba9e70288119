"""Request and record models for case chat threads and quick actions."""

from enum import Enum
from pydantic import BaseModel, Field
from typing import Dict, Any, List, Optional


class MessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class QuickActionType(str, Enum):
    CREATE_TASK = "CREATE_TASK"
    LINK_TICKET = "LINK_TICKET"
    REQUEST_DOCUMENT = "REQUEST_DOCUMENT"
    COMPLETE_STEP = "COMPLETE_STEP"


# Quick action ids used by the chat UI, mapped to their action types
QUICK_ACTION_IDS = {
    "criar_tarefa": QuickActionType.CREATE_TASK,
    "vincular_ticket": QuickActionType.LINK_TICKET,
    "solicitar_documento": QuickActionType.REQUEST_DOCUMENT,
    "concluir_etapa": QuickActionType.COMPLETE_STEP,
}


class ThreadProperties(BaseModel):
    numero_cnj: str
    titulo: str
    canal: str
    tipo: str
    contexto: Optional[Any] = None
    tags: Optional[List[str]] = None
    participantes: Optional[List[str]] = None


class CreateThreadRequest(BaseModel):
    numero_cnj: str
    context_type: str = "processo"
    properties: ThreadProperties


class Attachment(BaseModel):
    name: str
    type: str
    size: Optional[int] = None


class AddMessageRequest(BaseModel):
    role: MessageRole = MessageRole.USER
    content: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    attachments: Optional[List[Attachment]] = None


class QuickActionRequest(BaseModel):
    # Action type (CREATE_TASK) or chat UI id (criar_tarefa), resolved by the service
    action_type: str
    content: str
    numero_cnj: Optional[str] = None


class ChatStats(BaseModel):
    total_threads: int = 0
    total_messages: int = 0
    quick_actions_executed: int = 0
    last_activity: Optional[str] = None
