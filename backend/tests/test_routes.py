from unittest.mock import patch

import requests
from jose import jwt

from services import auth_service

CNJ = "0001234-56.2024.8.26.0100"


def _upstream(content: bytes, status_code: int = 200, reason: str = "OK") -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.encoding = "utf-8"
    response._content = content
    return response


def _create_thread(api_client):
    return api_client.post("/chat/threads", json={
        "numero_cnj": CNJ,
        "properties": {"numero_cnj": CNJ, "titulo": "Geral", "canal": "chat", "tipo": "interno"},
    }).json()["thread"]


def test_health(api_client):
    assert api_client.get("/health").json() == {"status": "ok"}


def test_list_tools(api_client):
    response = api_client.get("/tools/")

    assert response.status_code == 200
    tools = response.json()["tools"]
    assert [t["id"] for t in tools][0] == "petition_generator"
    assert tools[0]["parameters"][0]["validation"]["enum"][0] == "inicial"


def test_list_tools_by_category(api_client):
    response = api_client.get("/tools/", params={"category": "research"})

    assert [t["id"] for t in response.json()["tools"]] == ["jurisprudence_search"]


def test_list_categories(api_client):
    response = api_client.get("/tools/categories")

    assert response.json()["categories"][0] == "peticion"


def test_get_unknown_tool(api_client):
    response = api_client.get("/tools/ghost_tool")

    assert response.status_code == 404


def test_execute_tool_success(api_client):
    upstream = _upstream(b'{"deadline_date": "2024-03-18"}')

    with patch("services.tool_client.requests.post", return_value=upstream) as post:
        response = api_client.post("/tools/execute", json={
            "tool_id": "deadline_calculator",
            "parameters": {"event_date": "2024-03-01", "deadline_type": "recurso", "court_type": "federal"},
            "context": {"numero_cnj": CNJ},
        })

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"] == {"deadline_date": "2024-03-18"}
    assert body["tool_version"] == "1.0.0"
    assert body["execution_time_ms"] >= 0
    assert post.call_args.kwargs["json"]["context"] == {"numero_cnj": CNJ}


def test_execute_tool_validation_failure(api_client):
    with patch("services.tool_client.requests.post") as post:
        response = api_client.post("/tools/execute", json={"tool_id": "deadline_calculator", "parameters": {}})

    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "Required parameter 'event_date' is missing"}
    post.assert_not_called()


def test_execute_tool_null_data_is_kept(api_client):
    with patch("services.tool_client.requests.post", return_value=_upstream(b"null")):
        response = api_client.post("/tools/execute", json={
            "tool_id": "deadline_calculator",
            "parameters": {"event_date": "2024-03-01", "deadline_type": "recurso", "court_type": "federal"},
        })

    body = response.json()
    assert body["success"] is True
    assert "data" in body
    assert body["data"] is None
    assert "error" not in body


def test_execute_tool_redirect_is_a_failure(api_client):
    with patch("services.tool_client.requests.post", return_value=_upstream(b"", 302, "Found")):
        response = api_client.post("/tools/execute", json={
            "tool_id": "deadline_calculator",
            "parameters": {"event_date": "2024-03-01", "deadline_type": "recurso", "court_type": "federal"},
        })

    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "HTTP 302: Found"}


def test_quick_action_route_writes_audit(api_client, fake_db):
    thread = api_client.post("/chat/threads", json={
        "numero_cnj": CNJ,
        "properties": {"numero_cnj": CNJ, "titulo": "Geral", "canal": "chat", "tipo": "interno"},
    }).json()["thread"]

    response = api_client.post(f"/chat/threads/{thread['id']}/quick-actions", json={
        "action_type": "CREATE_TASK",
        "content": "  Revisar petição inicial  ",
    })

    assert response.status_code == 200
    assert response.json()["record"]["description"] == "Revisar petição inicial"
    assert response.json()["record"]["numero_cnj"] == CNJ

    messages = api_client.get(f"/chat/threads/{thread['id']}/messages").json()["messages"]
    assert [m["metadata"]["action_type"] for m in messages] == ["CREATE_TASK"]


def test_quick_action_route_failure(api_client, fake_db):
    thread = api_client.post("/chat/threads", json={
        "numero_cnj": CNJ,
        "properties": {"numero_cnj": CNJ, "titulo": "Geral", "canal": "chat", "tipo": "interno"},
    }).json()["thread"]
    fake_db.failing_tables.add("legalflow.activities")

    response = api_client.post(f"/chat/threads/{thread['id']}/quick-actions", json={
        "action_type": "CREATE_TASK",
        "content": "Revisar petição inicial",
    })

    assert response.status_code == 502
    assert len(fake_db.rows("ai_messages")) == 1


def test_quick_action_route_accepts_ui_id(api_client, fake_db):
    thread = _create_thread(api_client)

    response = api_client.post(f"/chat/threads/{thread['id']}/quick-actions", json={
        "action_type": "criar_tarefa",
        "content": "Revisar petição inicial",
    })

    assert response.status_code == 200
    assert response.json()["action_type"] == "CREATE_TASK"
    messages = api_client.get(f"/chat/threads/{thread['id']}/messages").json()["messages"]
    assert [m["metadata"]["action_type"] for m in messages] == ["CREATE_TASK"]


def test_quick_action_route_unknown_type_is_audited(api_client, fake_db):
    thread = _create_thread(api_client)

    response = api_client.post(f"/chat/threads/{thread['id']}/quick-actions", json={
        "action_type": "ARCHIVE_CASE",
        "content": "Arquivar",
    })

    assert response.status_code == 502
    messages = fake_db.rows("ai_messages")
    assert len(messages) == 1
    assert messages[0]["metadata"]["action_type"] == "ARCHIVE_CASE"
    assert messages[0]["metadata"]["result"] is None


def test_quick_action_unknown_thread(api_client):
    response = api_client.post("/chat/threads/missing/quick-actions", json={
        "action_type": "CREATE_TASK",
        "content": "texto",
    })

    assert response.status_code == 404


def test_chat_stats_and_export(api_client):
    thread = api_client.post("/chat/threads", json={
        "numero_cnj": CNJ,
        "properties": {"numero_cnj": CNJ, "titulo": "Geral", "canal": "chat", "tipo": "interno"},
    }).json()["thread"]
    api_client.post(f"/chat/threads/{thread['id']}/messages", json={"content": "Olá"})

    stats = api_client.get("/chat/stats", params={"numero_cnj": CNJ}).json()
    assert stats["total_threads"] == 1
    assert stats["total_messages"] == 1

    export = api_client.get(f"/chat/threads/{thread['id']}/export")
    assert export.status_code == 200
    assert export.text.startswith("# Geral")


def test_routes_require_bearer_token(fake_db, monkeypatch):
    from fastapi.testclient import TestClient
    from main import app

    monkeypatch.setenv("JWT_SECRET_KEY", "test-secret")
    auth_service.get_auth_config.cache_clear()
    try:
        client = TestClient(app)

        assert client.get("/tools/").status_code in (401, 403)
        assert client.get("/tools/", headers={"Authorization": "Bearer not-a-jwt"}).status_code == 401

        token = jwt.encode({"sub": "user-1", "email": "adv@example.com"}, "test-secret", algorithm="HS256")
        response = client.get("/tools/", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
    finally:
        auth_service.get_auth_config.cache_clear()
