"""Service layer: LLM, embeddings, memory, persistence."""
