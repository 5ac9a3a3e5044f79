"""Chat and agent Pydantic schemas."""

import json
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

USER_ROLE = "user"
MODEL_ROLE = "model"


class Part(BaseModel):
    """One text part of a message."""

    text: str


class Message(BaseModel):
    """A single turn of a transcript: {"role": ..., "parts": [{"text": ...}]}."""

    role: str
    parts: List[Part]

    @classmethod
    def from_text(cls, role: str, text: str) -> "Message":
        return cls(role=role, parts=[Part(text=text)])

    @property
    def text(self) -> str:
        """Text of the first part (messages carry a single part)."""
        return self.parts[0].text if self.parts else ""

    def normalized(self) -> "Message":
        """Copy of the message whose role is 'model' or, for anything else, 'user'."""
        role = MODEL_ROLE if self.role == MODEL_ROLE else USER_ROLE
        return Message(role=role, parts=[Part(text=p.text) for p in self.parts])


def dump_history(history: List[Message]) -> str:
    """Serialize a transcript to the JSON stored in chats.history."""
    return json.dumps([message.model_dump() for message in history], ensure_ascii=False)


def load_history(raw: Optional[str]) -> List[Message]:
    """Parse chats.history back into messages; empty or missing history gives []."""
    if not raw:
        return []
    return [Message.model_validate(item) for item in json.loads(raw)]


class ChatRequest(BaseModel):
    """Request body for a chat turn."""

    model_config = ConfigDict(populate_by_name=True)

    history: List[Message] = Field(default_factory=list)
    chat_id: Optional[int] = Field(default=None, alias="chatId")


class ChatResponse(BaseModel):
    """Model reply and the chat it was stored under."""

    model_config = ConfigDict(populate_by_name=True)

    response: str
    chat_id: int = Field(alias="chatId")


class ChatSummary(BaseModel):
    """Entry of the chat list."""

    id: int
    title: str


class ChatDetail(BaseModel):
    """Full chat with its transcript."""

    id: int
    title: str
    history: List[Message]
    status: Optional[str] = None
    created_at: Optional[datetime] = None


class AgentRunCreate(BaseModel):
    """Request body for starting an agent run."""

    context: str
    steps: List[str] = Field(default_factory=list)
    title: Optional[str] = None


class AgentRunAccepted(BaseModel):
    """Response returned as soon as an agent run is scheduled."""

    model_config = ConfigDict(populate_by_name=True)

    chat_id: int = Field(alias="chatId")
    status: str


class AgentRunStatus(BaseModel):
    """Progress view of an agent run."""

    model_config = ConfigDict(populate_by_name=True)

    chat_id: int = Field(alias="chatId")
    status: Optional[str]
    turns: int


class ExtractedText(BaseModel):
    """Text extracted from an uploaded file."""

    filename: str
    text: str
