import sys
from datetime import date
from pathlib import Path

# Ensure repository root is on sys.path so tests can import local modules
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from fastapi.testclient import TestClient

from pillpapa.ai_agent.errors import ChatNotInitializedError
from pillpapa.db.store import MedicationStore
from pillpapa.helpers.dependencies import get_chat_agent, get_lookup_agent, get_store
from pillpapa.main import get_application
from pillpapa.models.model_medicine import Medicine, MedicineFields

# A Monday, day index 1
TODAY = date(2024, 1, 1)


class MutableClock:
    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today


class FakeLookupAgent:
    def __init__(self):
        self.fields = MedicineFields(
            name="Ibuprofen",
            description="Pain reliever and fever reducer.",
            active_ingredients=["Ibuprofen"],
            interactions=["Aspirin", "Warfarin"],
            dosage="200mg every 4 to 6 hours",
        )
        self.error = None
        self.calls = []

    async def lookup_by_name(self, drug_name):
        self.calls.append(("name", drug_name))
        if self.error:
            raise self.error
        return self.fields

    async def lookup_by_image(self, image_bytes, mime_type):
        self.calls.append(("image", image_bytes, mime_type))
        if self.error:
            raise self.error
        return self.fields


class FakeChatAgent:
    def __init__(self):
        self.snapshots = []
        self.sent = []
        self.reply = "You take Aspirin on Monday at 08:00."
        self.error = None

    def start_conversation(self, context_snapshot):
        self.snapshots.append(context_snapshot)
        return f"session-{len(self.snapshots)}"

    async def send_message(self, session, message):
        if session is None:
            raise ChatNotInitializedError("Chat not initialized. Call start_conversation first.")
        self.sent.append((session, message))
        if self.error:
            raise self.error
        return self.reply


def make_medicine(medicine_id="m1", name="Aspirin", **kwargs) -> Medicine:
    defaults = dict(
        description="Pain reliever.",
        active_ingredients=["Acetylsalicylic acid"],
        interactions=["Warfarin"],
        dosage="1 tablet daily",
    )
    defaults.update(kwargs)
    return Medicine(id=medicine_id, name=name, **defaults)


@pytest.fixture
def clock():
    return MutableClock(TODAY)


@pytest.fixture
def store(clock):
    return MedicationStore(clock=clock)


@pytest.fixture
def lookup_agent():
    return FakeLookupAgent()


@pytest.fixture
def chat_agent():
    return FakeChatAgent()


@pytest.fixture
def client(store, lookup_agent, chat_agent):
    app = get_application()
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_lookup_agent] = lambda: lookup_agent
    app.dependency_overrides[get_chat_agent] = lambda: chat_agent
    with TestClient(app) as test_client:
        yield test_client
