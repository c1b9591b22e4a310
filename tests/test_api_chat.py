from conftest import make_medicine
from pillpapa.ai_agent.errors import GatewayError
from pillpapa.helpers.enums import AdherenceStatus
from pillpapa.helpers.schedule_views import build_context_snapshot
from pillpapa.services.srv_chat import GREETING, REPLY_FAILED_MESSAGE


def _texts(response):
    return [(m["sender"], m["text"]) for m in response.json()["data"]]


def test_send_before_start_fails(client, chat_agent):
    response = client.post("/api/chat/messages", json={"text": "Hello"})

    assert response.status_code == 409
    assert response.json()["success"] is False
    assert chat_agent.sent == []
    assert client.get("/api/chat/messages").json()["data"] == []


def test_start_seeds_snapshot_and_greets(client, store, chat_agent):
    store.add_medicine(make_medicine("m1", "Aspirin"))
    store.add_reminder("m1", 1, "08:00")

    response = client.post("/api/chat/start")

    assert response.status_code == 200
    assert _texts(response) == [("ai", GREETING)]
    assert chat_agent.snapshots == [build_context_snapshot(store.medicines, store.reminders)]


def test_send_appends_user_message_and_reply(client, chat_agent):
    client.post("/api/chat/start")

    response = client.post("/api/chat/messages", json={"text": "When do I take Aspirin?"})

    assert response.status_code == 200
    assert _texts(response) == [
        ("ai", GREETING),
        ("user", "When do I take Aspirin?"),
        ("ai", chat_agent.reply),
    ]
    assert chat_agent.sent == [("session-1", "When do I take Aspirin?")]
    assert _texts(client.get("/api/chat/messages")) == _texts(response)


def test_schedule_change_restarts_conversation(client, store, chat_agent):
    client.post("/api/chat/start")
    client.post("/api/chat/messages", json={"text": "Hi"})
    store.add_medicine(make_medicine("m1", "Aspirin"))

    response = client.post("/api/chat/messages", json={"text": "What do I take?"})

    assert len(chat_agent.snapshots) == 2
    assert "Aspirin" in chat_agent.snapshots[1]
    assert chat_agent.sent[-1] == ("session-2", "What do I take?")
    assert _texts(response) == [("ai", GREETING), ("user", "What do I take?"), ("ai", chat_agent.reply)]


def test_adherence_log_does_not_restart_conversation(client, store, chat_agent):
    client.post("/api/chat/start")
    store.log_adherence("r1", AdherenceStatus.TAKEN)

    client.post("/api/chat/messages", json={"text": "Hi"})

    assert len(chat_agent.snapshots) == 1


def test_gateway_failure_becomes_error_message(client, store, chat_agent):
    client.post("/api/chat/start")
    chat_agent.error = GatewayError("network down")

    response = client.post("/api/chat/messages", json={"text": "Hi"})

    assert response.status_code == 200
    assert _texts(response)[-1] == ("ai", REPLY_FAILED_MESSAGE)
    assert store.medicines == []


def test_empty_message_is_rejected(client, chat_agent):
    client.post("/api/chat/start")

    response = client.post("/api/chat/messages", json={"text": "   "})

    assert response.status_code == 400
    assert chat_agent.sent == []


def test_transcript_resets_as_soon_as_schedule_changes(client, store, chat_agent):
    client.post("/api/chat/start")
    client.post("/api/chat/messages", json={"text": "hi"})
    store.add_medicine(make_medicine("m1", "Aspirin"))

    response = client.get("/api/chat/messages")

    assert _texts(response) == [("ai", GREETING)]

    client.post("/api/chat/messages", json={"text": "What do I take?"})
    assert len(chat_agent.snapshots) == 2
    assert chat_agent.sent[-1] == ("session-2", "What do I take?")


def test_transcript_kept_when_nothing_changed(client, chat_agent):
    client.post("/api/chat/start")
    sent = client.post("/api/chat/messages", json={"text": "hi"})

    assert _texts(client.get("/api/chat/messages")) == _texts(sent)
