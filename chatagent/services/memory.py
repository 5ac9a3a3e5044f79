"""Vector memory of chat messages with cosine-similarity retrieval."""

import logging
import time
import uuid
from typing import List, Optional, Sequence, Tuple

import numpy as np
from sqlalchemy.orm import Session

from chatagent.config import settings
from chatagent.models.memory import MemoryChunk
from chatagent.schemas.chat import Message
from chatagent.services.chunking import chunk_text
from chatagent.services.embeddings import EmbeddingService

logger = logging.getLogger(__name__)

CONTEXT_SEPARATOR = "\n\n---\n\n"


def rank_by_similarity(
    query_embedding: Sequence[float],
    candidates: List[Tuple[str, Sequence[float]]],
    n_results: int,
) -> List[str]:
    """
    Order candidate texts by cosine similarity to the query.

    Args:
        query_embedding: Query vector
        candidates: (text, embedding) pairs; pairs without embedding are skipped
        n_results: Maximum number of texts to return

    Returns:
        Texts of the best matches, most similar first
    """
    if n_results <= 0:
        return []

    query_vec = np.array(query_embedding, dtype=float)
    scored = []
    for text, embedding in candidates:
        if embedding is None:
            continue
        chunk_vec = np.array(embedding, dtype=float)
        cosine_sim = np.dot(query_vec, chunk_vec) / (
            np.linalg.norm(query_vec) * np.linalg.norm(chunk_vec) + 1e-10
        )
        scored.append((float(cosine_sim), text))

    # Stable sort keeps insertion order between equal scores
    scored.sort(key=lambda x: x[0], reverse=True)
    return [text for _, text in scored[:n_results]]


class VectorMemory:
    """Per-chat memory: stores message chunks and retrieves relevant ones."""

    def __init__(self, db: Session, embedding_service: EmbeddingService):
        """Initialize vector memory."""
        self.db = db
        self.embedding_service = embedding_service

    def add_message(self, chat_id: int, message: Message) -> int:
        """
        Chunk, embed and store a message under its chat.

        Failures are logged and the message is skipped.

        Args:
            chat_id: Chat identifier
            message: Message to remember

        Returns:
            Number of chunks stored
        """
        chunks = chunk_text(message.text)
        if not chunks:
            return 0

        try:
            embeddings = self.embedding_service.embed_texts(chunks)
        except Exception as e:
            logger.error(f"Failed to embed message for chat {chat_id}: {e}")
            return 0

        stamp = f"{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"
        try:
            for idx, (text, embedding) in enumerate(zip(chunks, embeddings)):
                self.db.add(
                    MemoryChunk(
                        chunk_id=f"chat_{chat_id}_{message.role}_{stamp}_{idx}",
                        chat_id=chat_id,
                        role=message.role,
                        chunk_index=idx,
                        text=text,
                        embedding=embedding,
                    )
                )
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to store memory chunks for chat {chat_id}: {e}")
            return 0

        logger.info(f"Added {len(chunks)} chunks to memory for chat {chat_id}")
        return len(chunks)

    def retrieve_context(self, chat_id: int, query_text: str, n_results: Optional[int] = None) -> str:
        """
        Retrieve the chat's stored chunks most relevant to a query.

        Args:
            chat_id: Chat identifier, only its chunks are searched
            query_text: User query
            n_results: Number of chunks to return (defaults to MEMORY_RESULTS)

        Returns:
            Relevant chunks joined by a separator, or "" if none or on error
        """
        n_results = settings.MEMORY_RESULTS if n_results is None else n_results

        try:
            query_embedding = self.embedding_service.embed_text(query_text)
            rows = (
                self.db.query(MemoryChunk.text, MemoryChunk.embedding)
                .filter(MemoryChunk.chat_id == chat_id)
                .order_by(MemoryChunk.chunk_pk)
                .all()
            )
            documents = rank_by_similarity(
                query_embedding, [(row.text, row.embedding) for row in rows], n_results
            )
        except Exception as e:
            logger.error(f"Failed to retrieve context for chat {chat_id}: {e}")
            return ""

        if not documents:
            logger.info(f"No relevant context found for chat {chat_id}")
            return ""

        logger.info(f"Retrieved {len(documents)} context chunks for chat {chat_id}")
        return CONTEXT_SEPARATOR.join(documents)
