"""Agent run routes."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.orm import Session

from chatagent.agents.runner import execute_agent
from chatagent.database import get_db
from chatagent.dependencies import get_llm_client, get_store
from chatagent.models.chat import STATUS_RUNNING, Chat
from chatagent.schemas.chat import AgentRunAccepted, AgentRunCreate, AgentRunStatus, load_history
from chatagent.services.llm_client import LLMClient
from chatagent.services.store import SQLConversationStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/agent", tags=["agent"])

TITLE_LENGTH = 100


@router.post("", response_model=AgentRunAccepted, status_code=202)
def start_agent_run(
    data: AgentRunCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    store: SQLConversationStore = Depends(get_store),
    llm: LLMClient = Depends(get_llm_client),
):
    """Create the run's chat and execute its steps in the background."""
    if not data.context.strip():
        raise HTTPException(status_code=400, detail="An initial context is required")

    chat = Chat(
        title=(data.title or data.context.strip())[:TITLE_LENGTH],
        history="[]",
        status=STATUS_RUNNING,
    )
    db.add(chat)
    db.commit()

    logger.info(f"Created agent run {chat.id} with {len(data.steps)} steps")

    background_tasks.add_task(execute_agent, chat.id, data.context, data.steps, store, llm)

    return AgentRunAccepted(chat_id=chat.id, status=chat.status)


@router.get("/{chat_id}", response_model=AgentRunStatus)
def get_agent_run(chat_id: int, db: Session = Depends(get_db)):
    """Get the status and transcript size of an agent run."""
    chat = db.query(Chat).filter(Chat.id == chat_id).first()
    if not chat:
        raise HTTPException(status_code=404, detail="Agent run not found")

    return AgentRunStatus(
        chat_id=chat.id,
        status=chat.status,
        turns=len(load_history(chat.history)),
    )
