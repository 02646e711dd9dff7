from pydantic import BaseModel, Field, field_validator


class ChatRequest(BaseModel):
    """Request payload for posting a turn to a session.

    Attributes:
        message: User's question or prompt.
    """

    message: str = Field(..., min_length=1)

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class SessionCreated(BaseModel):
    """Response after a conversation thread is created.

    Attributes:
        thread_id: Remote thread identifier, the session handle.
        greeting: Opening assistant line to display.
    """

    thread_id: str
    greeting: str


class TurnReply(BaseModel):
    """Outcome of one user turn.

    Attributes:
        content: Assistant reply, or a fallback message on failure.
        success: Whether the reply came from the assistant.
        error: Description of the failure, if any.
    """

    content: str
    success: bool
    error: str | None = None
