"""Chat routes."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from chatagent.agents.prompts import build_augmented_prompt
from chatagent.database import get_db
from chatagent.dependencies import get_llm_client, get_memory
from chatagent.models.chat import Chat
from chatagent.schemas.chat import (
    MODEL_ROLE,
    ChatDetail,
    ChatRequest,
    ChatResponse,
    ChatSummary,
    Message,
    dump_history,
    load_history,
)
from chatagent.services.llm_client import LLMClient
from chatagent.services.memory import VectorMemory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chats"])

TITLE_LENGTH = 100


@router.get("/chats", response_model=List[ChatSummary])
def list_chats(db: Session = Depends(get_db)):
    """List all chats, newest first."""
    chats = db.query(Chat.id, Chat.title).order_by(Chat.id.desc()).all()
    return [ChatSummary(id=c.id, title=c.title) for c in chats]


@router.get("/chats/{chat_id}", response_model=ChatDetail)
def get_chat(chat_id: int, db: Session = Depends(get_db)):
    """Get one chat with its transcript."""
    chat = db.query(Chat).filter(Chat.id == chat_id).first()
    if not chat:
        raise HTTPException(status_code=404, detail="Chat not found")

    return ChatDetail(
        id=chat.id,
        title=chat.title,
        history=load_history(chat.history),
        status=chat.status,
        created_at=chat.created_at,
    )


@router.post("/chat", response_model=ChatResponse)
def chat(
    data: ChatRequest,
    db: Session = Depends(get_db),
    llm: LLMClient = Depends(get_llm_client),
    memory: VectorMemory = Depends(get_memory),
):
    """
    Answer the last message of a conversation using retrieved memory.

    New conversations are stored under a title taken from the question;
    existing ones have their history overwritten.
    """
    if not data.history:
        raise HTTPException(status_code=400, detail="Conversation history is required")

    user_message = data.history[-1]
    user_query = user_message.text

    chat_row = None
    if data.chat_id is not None:
        chat_row = db.query(Chat).filter(Chat.id == data.chat_id).first()
        if not chat_row:
            raise HTTPException(status_code=404, detail="Chat not found")

    try:
        context = memory.retrieve_context(chat_row.id, user_query) if chat_row else ""

        prompt = build_augmented_prompt(context, user_query)
        ai_text = llm.generate(prompt)
        ai_message = Message.from_text(MODEL_ROLE, ai_text)

        history = list(data.history) + [ai_message]
        if chat_row:
            chat_row.history = dump_history(history)
        else:
            chat_row = Chat(title=user_query[:TITLE_LENGTH], history=dump_history(history))
            db.add(chat_row)
        db.commit()

    except Exception as e:
        db.rollback()
        logger.error(f"Chat request failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="A server error occurred")

    memory.add_message(chat_row.id, user_message)
    memory.add_message(chat_row.id, ai_message)

    return ChatResponse(response=ai_text, chat_id=chat_row.id)
