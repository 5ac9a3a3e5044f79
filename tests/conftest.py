"""Pytest configuration and fixtures."""

import os

# Settings are read at import time
os.environ.setdefault("OPENROUTER_API_KEY", "test-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("EMBED_DIM", "4")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from chatagent.database import get_db, init_db  # noqa: E402
from chatagent.dependencies import get_embedding_service, get_llm_client, get_store  # noqa: E402
from chatagent.services.store import SQLConversationStore  # noqa: E402


class FakeEmbeddingService:
    """Deterministic 4-dimensional embeddings keyed on a few words."""

    VOCABULARY = ("contract", "tenant", "deadline", "payment")

    def embed_texts(self, texts):
        return [self.embed_text(t) for t in texts]

    def embed_text(self, text):
        lowered = text.lower()
        vector = [float(lowered.count(word)) for word in self.VOCABULARY]
        if not any(vector):
            vector = [0.1, 0.1, 0.1, 0.1]
        return vector


class FakeLLMClient:
    """Records prompts and sessions; replies with a canned answer."""

    def __init__(self):
        self.prompts = []
        self.sent = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        return f"Answer #{len(self.prompts)}"

    def start_chat(self, history=None):
        client = self
        history = list(history or [])

        class _Session:
            def send_message(self, text):
                client.sent.append((history, text))
                return f"Done: {text}"

        return _Session()


@pytest.fixture(scope="function")
def session_factory():
    """Session factory over a fresh in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    yield TestingSessionLocal

    engine.dispose()


@pytest.fixture(scope="function")
def test_db(session_factory):
    """Create a test database session for each test."""
    db = session_factory()

    yield db

    db.close()


@pytest.fixture
def fake_llm():
    return FakeLLMClient()


@pytest.fixture
def fake_embeddings():
    return FakeEmbeddingService()


@pytest.fixture
def client(session_factory, fake_llm, fake_embeddings):
    """TestClient whose collaborators are the test database and fakes."""
    from chatagent.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_llm_client] = lambda: fake_llm
    app.dependency_overrides[get_embedding_service] = lambda: fake_embeddings
    app.dependency_overrides[get_store] = lambda: SQLConversationStore(session_factory)

    yield TestClient(app)

    app.dependency_overrides.clear()
