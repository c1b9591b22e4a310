from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from pillpapa.ai_agent import gemini_client as gemini_module
from pillpapa.ai_agent.chat_agent import CONTEXT_ACKNOWLEDGEMENT, CONTEXT_PREAMBLE, SYSTEM_INSTRUCTION, ChatAgent
from pillpapa.ai_agent.errors import ChatNotInitializedError, GatewayError
from pillpapa.ai_agent.gemini_client import GeminiClient
from pillpapa.ai_agent.medicine_lookup_agent import MedicineLookupAgent, MedicineSchema


def _response(text, finish_reason=1):
    part = SimpleNamespace(text=text)
    candidate = SimpleNamespace(finish_reason=finish_reason, content=SimpleNamespace(parts=[part]))
    return SimpleNamespace(candidates=[candidate])


@pytest.fixture
def model():
    model = MagicMock()
    model.generate_content_async = AsyncMock()
    return model


@pytest.fixture
def gemini(monkeypatch, model):
    monkeypatch.setattr(gemini_module.genai, "configure", lambda **kwargs: None)
    monkeypatch.setattr(gemini_module.genai, "GenerativeModel", MagicMock(return_value=model))
    return GeminiClient(api_key="test-key", model_name="gemini-test")


def test_client_requires_api_key(monkeypatch):
    monkeypatch.setattr(gemini_module.settings, "GEMINI_API_KEY", "")

    with pytest.raises(ValueError):
        GeminiClient()


@pytest.mark.asyncio
async def test_generate_json_content_strips_code_fences(gemini, model):
    model.generate_content_async.return_value = _response('```json\n{"name": "Aspirin"}\n```')

    data = await gemini.generate_json_content("prompt", response_schema=MedicineSchema)

    assert data == {"name": "Aspirin"}
    config = model.generate_content_async.call_args.kwargs["generation_config"]
    assert config.response_mime_type == "application/json"
    assert config.response_schema is MedicineSchema


@pytest.mark.asyncio
async def test_generate_json_content_tolerates_trailing_commas(gemini, model):
    model.generate_content_async.return_value = _response('{"interactions": ["Warfarin",],}')

    data = await gemini.generate_json_content("prompt", response_schema=MedicineSchema)

    assert data == {"interactions": ["Warfarin"]}


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [
    _response("not json at all"),
    _response('["a list"]'),
    _response('{"name": "x"}', finish_reason=3),
    _response(""),
    SimpleNamespace(candidates=[]),
])
async def test_generate_json_content_rejects_unusable_responses(gemini, model, response):
    model.generate_content_async.return_value = response

    with pytest.raises(GatewayError):
        await gemini.generate_json_content("prompt", response_schema=MedicineSchema)


@pytest.mark.asyncio
async def test_generate_json_content_wraps_sdk_errors(gemini, model):
    model.generate_content_async.side_effect = RuntimeError("429 quota exceeded")

    with pytest.raises(GatewayError, match="quota"):
        await gemini.generate_json_content("prompt", response_schema=MedicineSchema)


@pytest.mark.asyncio
async def test_send_chat_message_returns_reply_text(gemini):
    session = MagicMock()
    session.send_message_async = AsyncMock(return_value=_response("Take it with food."))

    reply = await gemini.send_chat_message(session, "How do I take Aspirin?")

    assert reply == "Take it with food."
    session.send_message_async.assert_awaited_once_with("How do I take Aspirin?")


@pytest.mark.asyncio
async def test_lookup_by_name_fills_missing_fields_with_blanks():
    client = MagicMock()
    client.generate_json_content = AsyncMock(return_value={"name": "Aspirin", "interactions": None})
    agent = MedicineLookupAgent(client)

    fields = await agent.lookup_by_name("aspirin")

    assert fields.name == "Aspirin"
    assert fields.description == ""
    assert fields.active_ingredients == []
    assert fields.interactions == []
    assert fields.dosage == ""
    kwargs = client.generate_json_content.call_args.kwargs
    assert kwargs["contents"].endswith("The medicine name is: aspirin")
    assert kwargs["response_schema"] is MedicineSchema


@pytest.mark.asyncio
async def test_lookup_by_image_sends_inline_image():
    client = MagicMock()
    client.generate_json_content = AsyncMock(return_value={
        "name": "Ibuprofen",
        "description": "Pain reliever.",
        "active_ingredients": ["Ibuprofen"],
        "interactions": ["Aspirin"],
        "dosage": "200mg",
    })
    agent = MedicineLookupAgent(client)

    fields = await agent.lookup_by_image(b"image-bytes", "image/png")

    assert fields.interactions == ["Aspirin"]
    contents = client.generate_json_content.call_args.kwargs["contents"]
    assert contents[0] == {"mime_type": "image/png", "data": b"image-bytes"}


@pytest.mark.asyncio
async def test_lookup_rejects_mistyped_fields():
    client = MagicMock()
    client.generate_json_content = AsyncMock(return_value={"name": "Aspirin", "interactions": "Warfarin"})

    with pytest.raises(GatewayError):
        await MedicineLookupAgent(client).lookup_by_name("aspirin")


def test_start_conversation_seeds_context_and_acknowledgement():
    client = MagicMock()
    agent = ChatAgent(client)

    session = agent.start_conversation("CURRENT MEDICATIONS:\n- None\n")

    assert session is client.start_chat.return_value
    kwargs = client.start_chat.call_args.kwargs
    assert kwargs["history"] == [
        {"role": "user", "parts": [f"{CONTEXT_PREAMBLE}CURRENT MEDICATIONS:\n- None\n"]},
        {"role": "model", "parts": [CONTEXT_ACKNOWLEDGEMENT]},
    ]
    assert kwargs["system_instruction"] == SYSTEM_INSTRUCTION


@pytest.mark.asyncio
async def test_send_message_without_session_fails_fast():
    client = MagicMock()
    client.send_chat_message = AsyncMock()

    with pytest.raises(ChatNotInitializedError):
        await ChatAgent(client).send_message(None, "Hello")

    client.send_chat_message.assert_not_awaited()
