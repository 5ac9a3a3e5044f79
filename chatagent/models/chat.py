"""Chat model."""

from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, Text
from sqlalchemy.orm import relationship

from chatagent.database import Base

# Agent run lifecycle values stored in Chat.status
STATUS_RUNNING = "running"
STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"


class Chat(Base):
    """Chat holds one conversation or one agent run and its transcript."""

    __tablename__ = "chats"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    history = Column(Text, nullable=False, default="[]")  # JSON list of messages
    status = Column(Text)  # NULL for plain chats, 'running', 'completed', 'failed' for agent runs
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    memory_chunks = relationship("MemoryChunk", back_populates="chat", cascade="all, delete-orphan")
