"""Conversation memory model."""

from datetime import datetime

from pgvector.sqlalchemy import Vector
from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import relationship

from chatagent.config import settings
from chatagent.database import Base


class MemoryChunk(Base):
    """A chunk of a chat message with its embedding, used for context retrieval."""

    __tablename__ = "memory_chunks"

    chunk_pk = Column(Integer, primary_key=True, autoincrement=True)
    chunk_id = Column(Text, nullable=False, unique=True)  # chat_{chat_id}_{role}_{millis}_{nonce}_{index}
    chat_id = Column(Integer, ForeignKey("chats.id", ondelete="CASCADE"), nullable=False)
    role = Column(Text, nullable=False)
    chunk_index = Column(Integer, nullable=False)
    text = Column(Text, nullable=False)
    embedding = Column(Vector(settings.EMBED_DIM))
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    chat = relationship("Chat", back_populates="memory_chunks")

    __table_args__ = (
        Index("idx_memory_chunks_chat_id", "chat_id"),
        {"schema": None},
    )
