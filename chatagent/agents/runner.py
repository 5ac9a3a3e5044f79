"""Sequential agent runner with a checkpoint after every step."""

import logging
from typing import List, Optional, Protocol

from chatagent.agents.prompts import format_initial_context
from chatagent.models.chat import STATUS_COMPLETED, STATUS_FAILED
from chatagent.schemas.chat import MODEL_ROLE, USER_ROLE, Message
from chatagent.services.store import ConversationStore

logger = logging.getLogger(__name__)


class ChatSessionLike(Protocol):
    def send_message(self, text: str) -> str:
        ...


class ChatModel(Protocol):
    """Anything that opens a chat session over prior turns (see LLMClient)."""

    def start_chat(self, history: Optional[List[Message]] = None) -> ChatSessionLike:
        ...


def execute_agent(
    run_id: int,
    context: str,
    steps: List[str],
    store: ConversationStore,
    model: ChatModel,
) -> None:
    """
    Run the steps of an agent one after another against the model.

    The transcript starts with the formatted context and is persisted before
    the first step and after every completed step. Each step's instruction
    and the model's reply are appended together once the reply arrives. On
    success the run's status becomes 'completed'. Any error marks the run
    'failed' and appends an explanatory model turn; nothing is raised to the
    caller, which learns the outcome from the stored status.

    Args:
        run_id: Identifier of an existing run record
        context: Raw context supplied by the user
        steps: Instructions, sent in order
        store: Where the transcript and status are written
        model: Model that opens a session per step
    """
    history = [Message.from_text(USER_ROLE, format_initial_context(context))]

    step_number = 0
    step = None
    try:
        store.persist_transcript(run_id, history)
        logger.info(f"[Agent Run {run_id}] Started with {len(steps)} steps")

        for step_number, step in enumerate(steps, start=1):
            session = model.start_chat(history=[m.normalized() for m in history])
            reply = session.send_message(step)

            history.append(Message.from_text(USER_ROLE, step))
            history.append(Message.from_text(MODEL_ROLE, reply))
            store.persist_transcript(run_id, history)
            logger.info(f"[Agent Run {run_id}] Step {step_number}/{len(steps)} done")
        step = None

        store.set_status(run_id, STATUS_COMPLETED)
        logger.info(f"[Agent Run {run_id}] Completed successfully")

    except Exception as e:
        logger.error(f"[Agent Run {run_id}] Failed at step {step_number}: {e}", exc_info=True)
        history.append(Message.from_text(MODEL_ROLE, _error_text(step_number, step, e)))
        # Each write is attempted even if the other one fails
        try:
            store.set_status(run_id, STATUS_FAILED)
        except Exception:
            logger.exception(f"[Agent Run {run_id}] Could not set failed status")
        try:
            store.persist_transcript(run_id, history)
        except Exception:
            logger.exception(f"[Agent Run {run_id}] Could not persist error turn")


def _error_text(step_number: int, step: Optional[str], error: Exception) -> str:
    if step is None:
        return f"An error occurred while running the agent: {error}"
    return f"An error occurred while running the agent at step {step_number} ({step!r}): {error}"
