"""Embedding service using Ollama."""

import logging
from typing import List, Optional

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from chatagent.config import settings

logger = logging.getLogger(__name__)


class EmbeddingService:
    """Service for generating text embeddings using Ollama."""

    def __init__(self, transport: Optional[httpx.BaseTransport] = None):
        """Initialize the embedding service."""
        self.base_url = settings.OLLAMA_BASE_URL
        self.model = settings.OLLAMA_MODEL
        self.embed_dim = settings.EMBED_DIM
        self._transport = transport

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )
    def _embed_one(self, client: httpx.Client, text: str) -> List[float]:
        response = client.post(
            f"{self.base_url}/api/embeddings",
            json={"model": self.model, "prompt": text},
        )
        response.raise_for_status()
        return response.json()["embedding"]

    def embed_texts(self, texts: List[str]) -> List[List[float]]:
        """
        Generate embeddings for a list of texts.

        Args:
            texts: List of text strings to embed

        Returns:
            List of embedding vectors

        Raises:
            httpx.HTTPError: On API errors
            ValueError: On dimension mismatch
        """
        embeddings = []

        with httpx.Client(timeout=60.0, transport=self._transport) as client:
            for idx, text in enumerate(texts):
                logger.debug(f"Generating embedding {idx + 1}/{len(texts)}")

                embedding = self._embed_one(client, text)

                # Validate dimension
                if len(embedding) != self.embed_dim:
                    raise ValueError(
                        f"Embedding dimension mismatch: expected {self.embed_dim}, got {len(embedding)}"
                    )

                embeddings.append(embedding)

        return embeddings

    def embed_text(self, text: str) -> List[float]:
        """Generate the embedding of a single text."""
        return self.embed_texts([text])[0]
