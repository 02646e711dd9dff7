"""Conversation orchestration against the hosted assistant API.

One user turn is a fixed chain of calls:

    create thread (once) -> post message -> start run -> wait for run -> fetch messages

The chain state lives on an explicit ConversationSession rather than on the
orchestrator, so one orchestrator can drive any number of independent
sessions. A failed step raises and leaves earlier steps in place; nothing is
retried or rolled back.

Waiting for the run polls its status with exponential backoff until it reaches
a final status, bounded by the configured number of attempts.
"""

import asyncio
import logging
from enum import Enum

from ts_helper.client.config import AssistantConfig
from ts_helper.client.errors import PreconditionError, RunStatusError
from ts_helper.client.transport import AssistantTransport
from ts_helper.models import ChatMessage, MessageSender
from ts_helper.models.remote import (
    Message,
    MessageCreate,
    MessageList,
    Run,
    RunCreate,
    TextContentPart,
    Thread,
)

logger = logging.getLogger(__name__)

# Largest page the messages endpoint serves. Only the first page is read, so a
# thread longer than this surfaces a stale reply.
MESSAGE_PAGE_LIMIT = 100


class ChainState(str, Enum):
    """Progress of the current turn's request chain."""

    IDLE = "idle"
    THREAD_CREATED = "thread_created"
    MESSAGE_SENT = "message_sent"
    RUN_STARTED = "run_started"
    RESULTS_FETCHED = "results_fetched"


class ConversationSession:
    """Client-side handle for one conversation.

    Holds the remote thread id, the chain state of the current turn, the id of
    the last run and the local transcript. Turns are serialized through
    ``lock``; handles for the same thread may share one.
    """

    def __init__(
        self, thread_id: str | None = None, lock: asyncio.Lock | None = None
    ) -> None:
        self.thread_id: str | None = thread_id
        self.state = ChainState.THREAD_CREATED if thread_id else ChainState.IDLE
        self.run_id: str | None = None
        self.messages: list[ChatMessage] = []
        self.lock = lock or asyncio.Lock()

    def add_message(self, sender: MessageSender, content: str) -> ChatMessage:
        message = ChatMessage(sender=sender, content=content)
        self.messages.append(message)
        return message


def extract_reply(messages: list[Message], fallback: str) -> str:
    """Return the text of the last assistant message, or ``fallback``.

    Args:
        messages: Thread messages in ascending (oldest first) order.
        fallback: Text returned when no assistant message exists.

    Returns:
        The assistant's text parts joined with newlines.
    """
    for message in reversed(messages):
        if message.role == "assistant":
            return message.text_value()
    logger.info("No assistant response found in messages.")
    return fallback


class ConversationOrchestrator:
    """Sequences the thread, message, run and fetch calls for a session."""

    def __init__(self, transport: AssistantTransport, config: AssistantConfig) -> None:
        self._transport = transport
        self._config = config

    def _require_thread(self, session: ConversationSession) -> str:
        if not session.thread_id:
            raise PreconditionError("Thread ID is missing.")
        return session.thread_id

    def _require_assistant(self) -> str:
        if not self._config.assistant_id:
            raise PreconditionError("Assistant ID is missing.")
        return self._config.assistant_id

    async def create_thread(self, session: ConversationSession) -> str:
        """Create the remote thread and bind it to ``session``.

        On failure the session stays idle and the error propagates.
        """
        thread = await self._transport.perform_request("POST", "/threads", Thread, json={})
        session.thread_id = thread.id
        session.state = ChainState.THREAD_CREATED
        logger.info(f"Created thread {thread.id}")
        return thread.id

    async def send_message(self, session: ConversationSession, content: str) -> Message:
        """Post one user message with a single text part."""
        self._require_assistant()
        thread_id = self._require_thread(session)

        payload = MessageCreate(content=[TextContentPart(text=content)])
        message = await self._transport.perform_request(
            "POST",
            f"/threads/{thread_id}/messages",
            Message,
            json=payload.model_dump(),
        )
        session.state = ChainState.MESSAGE_SENT
        return message

    async def create_run(self, session: ConversationSession) -> Run:
        """Start a non-streaming run of the configured assistant."""
        assistant_id = self._require_assistant()
        thread_id = self._require_thread(session)
        if session.state != ChainState.MESSAGE_SENT:
            raise PreconditionError("No message has been sent for this turn.")

        payload = RunCreate(assistant_id=assistant_id)
        run = await self._transport.perform_request(
            "POST",
            f"/threads/{thread_id}/runs",
            Run,
            json=payload.model_dump(),
        )
        session.run_id = run.id
        session.state = ChainState.RUN_STARTED
        logger.debug(f"Started run {run.id} on thread {thread_id} ({run.status})")
        return run

    async def wait_for_run(self, session: ConversationSession, run: Run) -> Run:
        """Poll ``run`` until it reaches a final status.

        Delays start at ``poll_interval`` and grow by ``poll_backoff`` up to
        ``poll_max_interval``. At most ``poll_max_attempts`` status checks are
        made.

        Raises:
            RunStatusError: The run ended in a status other than "completed",
                or it was still in progress after the last check.
        """
        thread_id = self._require_thread(session)
        delay = self._config.poll_interval

        for attempt in range(1, self._config.poll_max_attempts + 1):
            if run.is_terminal:
                break
            await asyncio.sleep(delay)
            delay = min(delay * self._config.poll_backoff, self._config.poll_max_interval)
            run = await self._transport.perform_request(
                "GET", f"/threads/{thread_id}/runs/{run.id}", Run
            )
            logger.debug(f"Run {run.id} status after check {attempt}: {run.status}")

        if not run.is_terminal:
            raise RunStatusError(
                f"Run {run.id} still {run.status} after "
                f"{self._config.poll_max_attempts} status checks",
                run_id=run.id,
                status=run.status,
            )
        if run.status != "completed":
            reason = f": {run.last_error.message}" if run.last_error else ""
            raise RunStatusError(
                f"Run {run.id} ended with status {run.status}{reason}",
                run_id=run.id,
                status=run.status,
            )
        return run

    async def fetch_messages(self, session: ConversationSession) -> str:
        """Fetch the thread and return the latest assistant reply text."""
        thread_id = self._require_thread(session)
        message_list = await self._transport.perform_request(
            "GET",
            f"/threads/{thread_id}/messages",
            MessageList,
            params={"order": "asc", "limit": MESSAGE_PAGE_LIMIT},
        )
        session.state = ChainState.RESULTS_FETCHED
        return extract_reply(message_list.data, self._config.fallbacks.no_assistant_reply)
