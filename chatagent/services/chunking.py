"""Fixed-width text chunking with overlap for conversation memory."""

from typing import List, Optional

from chatagent.config import settings


def chunk_text(text: str, chunk_size: Optional[int] = None, overlap: Optional[int] = None) -> List[str]:
    """
    Split text into fixed-width character windows that overlap.

    Each window starts ``chunk_size - overlap`` characters after the previous
    one, so the last ``overlap`` characters of a chunk open the next one.

    Args:
        text: Text to split
        chunk_size: Characters per chunk (defaults to MEMORY_CHUNK_SIZE)
        overlap: Characters shared by consecutive chunks (defaults to MEMORY_CHUNK_OVERLAP)

    Returns:
        List of chunks, empty for empty text

    Raises:
        ValueError: If overlap is not smaller than chunk_size
    """
    chunk_size = settings.MEMORY_CHUNK_SIZE if chunk_size is None else chunk_size
    overlap = settings.MEMORY_CHUNK_OVERLAP if overlap is None else overlap

    if chunk_size <= 0 or overlap < 0 or overlap >= chunk_size:
        raise ValueError(f"Invalid chunking parameters: chunk_size={chunk_size}, overlap={overlap}")

    chunks = []
    if not text:
        return chunks

    step = chunk_size - overlap
    for start in range(0, len(text), step):
        chunks.append(text[start:start + chunk_size])

    return chunks
