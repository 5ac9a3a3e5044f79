"""SQLAlchemy ORM models."""

from chatagent.models.chat import Chat
from chatagent.models.memory import MemoryChunk

__all__ = [
    "Chat",
    "MemoryChunk",
]
