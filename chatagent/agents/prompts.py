"""Prompt construction for agent runs and retrieval-augmented chat."""

INITIAL_CONTEXT_LABEL = "**Initial Context Provided:**"

NO_CONTEXT_FOUND = "No relevant context found."


def format_initial_context(context: str) -> str:
    """Render the caller's context as the block-quoted seed message of a run.

    Every line of ``context`` becomes a Markdown quote line. An empty context
    yields an empty quote line.
    """
    quoted = ">" + context.replace("\n", "\n>")
    return f"{INITIAL_CONTEXT_LABEL}\n\n{quoted}\n\n---"


def build_augmented_prompt(context: str, question: str) -> str:
    """Wrap a user question with context retrieved from earlier turns."""
    return f"""
Please act as a helpful legal assistant.
Use the following CONTEXT from earlier parts of this conversation to inform your answer.
If the context is not relevant, ignore it and answer the user's QUESTION as well as you can.

---
CONTEXT:
{context or NO_CONTEXT_FOUND}
---

QUESTION:
{question}
"""
