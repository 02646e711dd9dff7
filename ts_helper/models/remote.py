"""Records exchanged with the hosted assistant API.

The service returns loosely-typed JSON: a content part's ``text`` may be a bare
string or an object, metadata maps hold arbitrary values, and most fields are
optional. Unknown fields are ignored everywhere.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

TERMINAL_RUN_STATUSES = frozenset(
    {"completed", "failed", "cancelled", "expired", "incomplete", "requires_action"}
)


class RemoteRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Tool(RemoteRecord):
    type: str


class MessageText(RemoteRecord):
    """Text body of a content part.

    Attributes:
        value: The text itself.
        annotations: Citations or file references, passed through untouched.
    """

    value: str
    annotations: list[Any] | None = None


class ContentItem(RemoteRecord):
    """One part of a message body.

    Attributes:
        type: Part type, "text" for text parts.
        text: Decoded text, or None when the part carries no readable text.
    """

    type: str
    text: MessageText | None = None

    @field_validator("text", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> MessageText | None:
        """Accept the object form first, then a bare string, else drop it."""
        if isinstance(v, dict):
            try:
                return MessageText.model_validate(v)
            except ValidationError:
                return None
        if isinstance(v, str):
            return MessageText(value=v, annotations=None)
        return None


class Attachment(RemoteRecord):
    file_id: str
    tools: list[Tool] = Field(default_factory=list)


class Thread(RemoteRecord):
    id: str
    object: str
    created_at: int
    metadata: dict[str, Any] | None = None
    tool_resources: dict[str, Any] | None = None


class Message(RemoteRecord):
    """A message stored on a thread."""

    id: str
    object: str
    created_at: int
    assistant_id: str | None = None
    thread_id: str
    run_id: str | None = None
    role: str
    content: list[ContentItem]
    attachments: list[Attachment] | None = None
    metadata: dict[str, Any] | None = None

    def text_value(self) -> str:
        """Join the message's text parts, in order, with newlines."""
        return "\n".join(item.text.value for item in self.content if item.text is not None)


class RunLastError(RemoteRecord):
    code: str
    message: str


class Run(RemoteRecord):
    """One assistant processing cycle on a thread."""

    id: str
    object: str
    created_at: int
    assistant_id: str
    thread_id: str
    status: str
    model: str | None = None
    last_error: RunLastError | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_RUN_STATUSES


class MessageList(RemoteRecord):
    """First page of a thread's messages.

    Attributes:
        object: Always "list".
        data: Messages in the requested order.
        first_id: Id of the first message on the page.
        last_id: Id of the last message on the page.
        has_more: Whether further pages exist (not traversed).
    """

    object: str
    data: list[Message]
    first_id: str | None = None
    last_id: str | None = None
    has_more: bool


class APIErrorDetail(RemoteRecord):
    message: str
    type: str
    param: str | None = None
    code: str | int | None = None


class ErrorResponse(RemoteRecord):
    """Error envelope the service returns on any endpoint."""

    error: APIErrorDetail


# Request payloads


class TextContentPart(BaseModel):
    type: Literal["text"] = "text"
    text: str


class MessageCreate(BaseModel):
    role: Literal["user"] = "user"
    content: list[TextContentPart]


class RunCreate(BaseModel):
    assistant_id: str
    stream: bool = False
