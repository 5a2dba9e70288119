"""Chat service for case threads and their messages."""

from datetime import datetime, timezone
from typing import Optional, Dict, Any, List
from services import database
from services.errors import ChatServiceError


ROLE_ICONS = {
    "user": "👤",
    "assistant": "🤖",
}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def create_thread(
    numero_cnj: str,
    context_type: str,
    properties: Dict[str, Any]
) -> Dict[str, Any]:
    """Create a new conversation thread for a case."""
    try:
        thread_data = {
            "numero_cnj": numero_cnj,
            "context_type": context_type,
            "properties": {
                **properties,
                "criado_em": _now()
            }
        }

        response = database.get_supabase().table("thread_links").insert(thread_data).execute()

        if response.data and len(response.data) > 0:
            return response.data[0]
        else:
            raise ChatServiceError("Failed to create thread")

    except ChatServiceError:
        raise
    except Exception as e:
        raise ChatServiceError(f"Error creating thread: {str(e)}") from e


def get_thread_by_id(thread_id: str) -> Optional[Dict[str, Any]]:
    try:
        response = database.get_supabase().table("thread_links").select("*").eq(
            "id", thread_id
        ).execute()

        if response.data and len(response.data) > 0:
            return response.data[0]
        return None

    except Exception as e:
        raise ChatServiceError(f"Error fetching thread: {str(e)}") from e


def get_threads_by_case(numero_cnj: str) -> List[Dict[str, Any]]:
    """Threads of a case, most recently updated first."""
    try:
        response = database.get_supabase().table("thread_links").select("*").eq(
            "properties->>numero_cnj", numero_cnj
        ).order("updated_at", desc=True).execute()

        return response.data if response.data else []

    except Exception as e:
        raise ChatServiceError(f"Error fetching threads: {str(e)}") from e


def get_messages_by_thread(thread_id: str) -> List[Dict[str, Any]]:
    """Messages of a thread, oldest first."""
    try:
        response = database.get_supabase().table("ai_messages").select("*").eq(
            "thread_link_id", thread_id
        ).order("created_at").execute()

        return response.data if response.data else []

    except Exception as e:
        raise ChatServiceError(f"Error fetching messages: {str(e)}") from e


def add_message(
    thread_id: str,
    role: str,
    content: str,
    metadata: Optional[Dict[str, Any]] = None,
    attachments: Optional[List[Dict[str, Any]]] = None
) -> Dict[str, Any]:
    """Append a message to a thread and bump the thread's updated_at."""
    try:
        message_data = {
            "thread_link_id": thread_id,
            "role": role,
            "content": content,
            "metadata": {
                **(metadata or {}),
                "timestamp": _now()
            },
            "attachments": attachments or None
        }

        response = database.get_supabase().table("ai_messages").insert(message_data).execute()

        if not response.data:
            raise ChatServiceError("Failed to add message")

        update_thread_timestamp(thread_id)

        return response.data[0]

    except ChatServiceError:
        raise
    except Exception as e:
        raise ChatServiceError(f"Error adding message: {str(e)}") from e


def update_thread_timestamp(thread_id: str) -> None:
    try:
        database.get_supabase().table("thread_links").update(
            {"updated_at": _now()}
        ).eq("id", thread_id).execute()

    except Exception as e:
        raise ChatServiceError(f"Error updating thread: {str(e)}") from e


def log_quick_action(
    thread_id: str,
    action_type: str,
    content: str,
    result: Optional[Any] = None
) -> Dict[str, Any]:
    """Record a quick action attempt as a system message on its thread."""
    try:
        message_data = {
            "thread_link_id": thread_id,
            "role": "system",
            "content": f"Ação executada: {action_type}. {content}",
            "metadata": {
                "action_type": action_type,
                "result": result,
                "timestamp": _now()
            }
        }

        response = database.get_supabase().table("ai_messages").insert(message_data).execute()

        if response.data and len(response.data) > 0:
            return response.data[0]
        else:
            raise ChatServiceError("Failed to log quick action")

    except ChatServiceError:
        raise
    except Exception as e:
        raise ChatServiceError(f"Error logging quick action: {str(e)}") from e


def get_chat_stats(numero_cnj: str) -> Dict[str, Any]:
    """Thread, message and quick action counts for a case."""
    try:
        client = database.get_supabase()

        threads_response = client.table("thread_links").select("id, created_at").eq(
            "properties->>numero_cnj", numero_cnj
        ).execute()
        threads = threads_response.data or []

        if not threads:
            return {
                "total_threads": 0,
                "total_messages": 0,
                "quick_actions_executed": 0,
                "last_activity": None
            }

        thread_ids = [thread["id"] for thread in threads]

        messages_response = client.table("ai_messages").select("id, metadata, created_at").in_(
            "thread_link_id", thread_ids
        ).execute()
        messages = messages_response.data or []

        quick_actions = [
            message for message in messages
            if (message.get("metadata") or {}).get("action_type")
            or (message.get("metadata") or {}).get("quick_action")
        ]

        # ISO timestamps from the database sort chronologically as strings
        last_activity = max(
            (message["created_at"] for message in messages if message.get("created_at")),
            default=None
        )

        return {
            "total_threads": len(threads),
            "total_messages": len(messages),
            "quick_actions_executed": len(quick_actions),
            "last_activity": last_activity
        }

    except Exception as e:
        raise ChatServiceError(f"Error fetching chat stats: {str(e)}") from e


def _format_timestamp(value: Optional[str]) -> str:
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return parsed.strftime("%d/%m/%Y %H:%M:%S")


def export_thread_to_markdown(thread_id: str) -> str:
    """Render a thread and its messages as a markdown document."""
    thread = get_thread_by_id(thread_id)
    if not thread:
        raise ChatServiceError("Thread not found")

    messages = get_messages_by_thread(thread_id)
    properties = thread.get("properties") or {}

    lines = [
        f"# {properties.get('titulo', '')}",
        "",
        f"**Processo:** {properties.get('numero_cnj', thread.get('numero_cnj', ''))}",
        f"**Canal:** {properties.get('canal', '')}",
        f"**Tipo:** {properties.get('tipo', '')}",
        f"**Criado em:** {_format_timestamp(thread.get('created_at'))}",
        "",
        "---",
        "",
    ]

    for message in messages:
        role = message.get("role", "")
        icon = ROLE_ICONS.get(role, "⚙️")
        lines.append(f"## {icon} {role.upper()} - {_format_timestamp(message.get('created_at'))}")
        lines.append("")
        lines.append(message.get("content", ""))
        lines.append("")

        attachments = message.get("attachments") or []
        if attachments:
            lines.append("**Anexos:**")
            for attachment in attachments:
                lines.append(f"- {attachment.get('name')} ({attachment.get('type')})")
            lines.append("")

        action_type = (message.get("metadata") or {}).get("action_type")
        if action_type:
            lines.append(f"*Ação executada: {action_type}*")
            lines.append("")

        lines.append("---")
        lines.append("")

    return "\n".join(lines)
