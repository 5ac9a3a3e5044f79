"""Tests for vector memory."""

from chatagent.config import settings
from chatagent.models.chat import Chat
from chatagent.models.memory import MemoryChunk
from chatagent.schemas.chat import Message
from chatagent.services.memory import CONTEXT_SEPARATOR, VectorMemory, rank_by_similarity


def _chat(db, title="chat"):
    chat = Chat(title=title, history="[]")
    db.add(chat)
    db.commit()
    return chat.id


class BrokenEmbeddingService:
    def embed_texts(self, texts):
        raise ConnectionError("embedding server down")

    def embed_text(self, text):
        raise ConnectionError("embedding server down")


def test_rank_by_similarity_orders_by_cosine():
    candidates = [
        ("orthogonal", [0.0, 1.0]),
        ("same direction", [2.0, 0.0]),
        ("diagonal", [1.0, 1.0]),
        ("no embedding", None),
    ]

    ranked = rank_by_similarity([1.0, 0.0], candidates, n_results=5)

    assert ranked == ["same direction", "diagonal", "orthogonal"]


def test_rank_by_similarity_limits_results():
    candidates = [(str(i), [1.0, float(i)]) for i in range(10)]

    assert len(rank_by_similarity([1.0, 0.0], candidates, n_results=3)) == 3
    assert rank_by_similarity([1.0, 0.0], candidates, n_results=0) == []


def test_add_message_stores_chunks(test_db, fake_embeddings):
    chat_id = _chat(test_db)
    memory = VectorMemory(test_db, fake_embeddings)

    stored = memory.add_message(chat_id, Message.from_text("user", "a" * 1500))

    chunks = test_db.query(MemoryChunk).order_by(MemoryChunk.chunk_index).all()
    assert stored == 2
    assert [len(c.text) for c in chunks] == [1000, 600]
    assert all(c.chunk_id.startswith(f"chat_{chat_id}_user_") for c in chunks)
    assert list(chunks[0].embedding) == fake_embeddings.embed_text("a" * 1000)


def test_add_empty_message_stores_nothing(test_db, fake_embeddings):
    chat_id = _chat(test_db)

    assert VectorMemory(test_db, fake_embeddings).add_message(chat_id, Message.from_text("user", "")) == 0


def test_retrieve_context_prefers_relevant_chunks(test_db, fake_embeddings):
    chat_id = _chat(test_db)
    memory = VectorMemory(test_db, fake_embeddings)
    memory.add_message(chat_id, Message.from_text("user", "The tenant pays rent monthly."))
    memory.add_message(chat_id, Message.from_text("model", "The contract deadline is June."))

    context = memory.retrieve_context(chat_id, "What is the contract deadline?", n_results=1)

    assert context == "The contract deadline is June."


def test_retrieve_context_joins_documents(test_db, fake_embeddings):
    chat_id = _chat(test_db)
    memory = VectorMemory(test_db, fake_embeddings)
    memory.add_message(chat_id, Message.from_text("user", "contract"))
    memory.add_message(chat_id, Message.from_text("model", "contract deadline"))

    context = memory.retrieve_context(chat_id, "contract", n_results=5)

    assert context.split(CONTEXT_SEPARATOR) == ["contract", "contract deadline"]


def test_retrieve_context_is_scoped_to_chat(test_db, fake_embeddings):
    first = _chat(test_db, "first")
    second = _chat(test_db, "second")
    memory = VectorMemory(test_db, fake_embeddings)
    memory.add_message(first, Message.from_text("user", "tenant payment terms"))

    assert memory.retrieve_context(second, "tenant payment") == ""


def test_memory_failures_are_swallowed(test_db):
    chat_id = _chat(test_db)
    memory = VectorMemory(test_db, BrokenEmbeddingService())

    assert memory.add_message(chat_id, Message.from_text("user", "hello")) == 0
    assert memory.retrieve_context(chat_id, "hello") == ""
    assert test_db.query(MemoryChunk).count() == 0


def test_retrieve_context_default_result_count(test_db, fake_embeddings):
    chat_id = _chat(test_db)
    memory = VectorMemory(test_db, fake_embeddings)
    for i in range(7):
        memory.add_message(chat_id, Message.from_text("user", f"contract clause {i}"))

    context = memory.retrieve_context(chat_id, "contract", n_results=None)

    assert len(context.split(CONTEXT_SEPARATOR)) == settings.MEMORY_RESULTS
