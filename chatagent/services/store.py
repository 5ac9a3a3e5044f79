"""Conversation store: durable transcript and status of a run."""

import logging
from typing import Callable, List, Protocol

from sqlalchemy.orm import Session

from chatagent.models.chat import Chat
from chatagent.schemas.chat import Message, dump_history

logger = logging.getLogger(__name__)


class ConversationStore(Protocol):
    """Key-addressed persistence of a run's transcript and status."""

    def persist_transcript(self, run_id: int, transcript: List[Message]) -> None:
        ...

    def set_status(self, run_id: int, status: str) -> None:
        ...


class SQLConversationStore:
    """ConversationStore over the chats table.

    Every call opens its own session and commits before returning, so a
    write is durable once the call returns. Both calls overwrite the
    stored value.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def _update(self, run_id: int, **values) -> None:
        db = self.session_factory()
        try:
            updated = db.query(Chat).filter(Chat.id == run_id).update(values, synchronize_session=False)
            if not updated:
                raise KeyError(f"Chat {run_id} does not exist")
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def persist_transcript(self, run_id: int, transcript: List[Message]) -> None:
        """Overwrite the stored transcript of a run."""
        self._update(run_id, history=dump_history(transcript))
        logger.debug(f"Persisted {len(transcript)} turns for chat {run_id}")

    def set_status(self, run_id: int, status: str) -> None:
        """Overwrite the status of a run."""
        self._update(run_id, status=status)
