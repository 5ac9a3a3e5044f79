"""FastAPI dependency providers for shared collaborators."""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from chatagent.database import SessionLocal, get_db
from chatagent.services.embeddings import EmbeddingService
from chatagent.services.llm_client import LLMClient
from chatagent.services.memory import VectorMemory
from chatagent.services.store import SQLConversationStore


@lru_cache
def get_llm_client() -> LLMClient:
    """Process-wide LLM client."""
    return LLMClient()


@lru_cache
def get_embedding_service() -> EmbeddingService:
    """Process-wide embedding service."""
    return EmbeddingService()


def get_memory(
    db: Session = Depends(get_db),
    embedding_service: EmbeddingService = Depends(get_embedding_service),
) -> VectorMemory:
    """Vector memory bound to the request session."""
    return VectorMemory(db, embedding_service)


def get_store() -> SQLConversationStore:
    """Conversation store with its own sessions, usable after the request ends."""
    return SQLConversationStore(SessionLocal)
