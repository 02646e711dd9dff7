"""Pydantic models for the chat transcript, the HTTP API and the remote service.

Models:
    - MessageSender: Who wrote a transcript entry
    - ChatMessage: Individual message in the local transcript
    - schemas: Request/response payloads of the HTTP API
    - remote: Records exchanged with the hosted assistant API
"""

import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MessageSender(str, Enum):
    """Author of a transcript entry."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """A single chat message in the local transcript.

    Attributes:
        id: Local identifier, used by the UI to key rendered rows.
        sender: The speaker, user or assistant.
        content: The message text.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    sender: MessageSender = Field(..., description="Message author: 'user' or 'assistant'")
    content: str = Field(..., description="The message content")
