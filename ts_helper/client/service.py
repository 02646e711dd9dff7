"""Chat service: the UI-facing entry point to the hosted assistant.

Architecture Decisions:

1. **Explicit sessions** - Each conversation is a ConversationSession handle
   passed into every call. The service keeps no transcript or chain state, so
   the HTTP API can rebuild a handle from a thread id on each request.

2. **Fallbacks at this boundary** - The transport and orchestrator raise typed
   errors. This layer is the only place that turns them into the user-facing
   texts from FallbackMessages, picked by the step that failed.

3. **Serialized turns** - A turn holds the session lock for its whole chain, so
   a double submit waits instead of racing a second run on the same thread.
   Locks are kept per thread id and shared by every handle for that thread,
   including handles rebuilt by separate HTTP requests.

4. **Singleton Pattern** - One service (and one pooled httpx client) is shared
   by the API routes and the chat page.
"""

import asyncio
import logging
import weakref

from ts_helper.client.config import AssistantConfig, get_assistant_config
from ts_helper.client.errors import AssistantClientError
from ts_helper.client.orchestrator import ConversationOrchestrator, ConversationSession
from ts_helper.client.transport import AssistantTransport
from ts_helper.models import MessageSender
from ts_helper.models.schemas import TurnReply

logger = logging.getLogger(__name__)


class ChatService:
    """Creates conversations and runs user turns against the assistant.

    Wraps ConversationOrchestrator with:
    - Session creation and resumption by thread id
    - Per-session serialization of turns
    - Transcript bookkeeping on the session
    - Mapping of every client error to a fallback message
    """

    def __init__(
        self,
        config: AssistantConfig | None = None,
        transport: AssistantTransport | None = None,
    ) -> None:
        """Initialize the chat service.

        Args:
            config: Optional client configuration.
                    Loads from environment if not provided.
            transport: Optional transport, e.g. one sharing a test client.
        """
        self._config = config or get_assistant_config()
        self._transport = transport or AssistantTransport(self._config)
        self._orchestrator = ConversationOrchestrator(self._transport, self._config)
        self._thread_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    @property
    def greeting(self) -> str:
        return self._config.fallbacks.greeting

    @property
    def thread_failed_message(self) -> str:
        return self._config.fallbacks.thread_failed

    async def create_session(self) -> ConversationSession:
        """Create a remote thread and return its session handle.

        Returns:
            A session in the THREAD_CREATED state.

        Raises:
            AssistantClientError: If the thread could not be created.
        """
        session = ConversationSession()
        try:
            await self._orchestrator.create_thread(session)
        except AssistantClientError as e:
            logger.error(f"Failed to create thread: {e}")
            raise
        session.lock = self._lock_for(session.thread_id)
        return session

    def resume_session(self, thread_id: str) -> ConversationSession:
        """Rebuild a handle for a thread created earlier."""
        return ConversationSession(thread_id=thread_id, lock=self._lock_for(thread_id))

    def _lock_for(self, thread_id: str) -> asyncio.Lock:
        # Held only while some handle for the thread is alive.
        lock = self._thread_locks.get(thread_id)
        if lock is None:
            lock = asyncio.Lock()
            self._thread_locks[thread_id] = lock
        return lock

    def _fail(self, session: ConversationSession, fallback: str, error: Exception) -> TurnReply:
        session.add_message(MessageSender.ASSISTANT, fallback)
        return TurnReply(content=fallback, success=False, error=str(error))

    async def send_turn(self, session: ConversationSession, text: str) -> TurnReply:
        """Send one user message and wait for the assistant's reply.

        Args:
            session: Handle returned by create_session or resume_session.
            text: The user's message.

        Returns:
            TurnReply with the assistant text, or a fallback on failure.
        """
        fallbacks = self._config.fallbacks

        async with session.lock:
            session.add_message(MessageSender.USER, text)

            try:
                await self._orchestrator.send_message(session, text)
            except AssistantClientError as e:
                logger.warning(f"Failed to send message: {e}")
                return self._fail(session, fallbacks.send_failed, e)

            try:
                run = await self._orchestrator.create_run(session)
                await self._orchestrator.wait_for_run(session, run)
            except AssistantClientError as e:
                logger.warning(f"Failed to process message: {e}")
                return self._fail(session, fallbacks.run_failed, e)

            try:
                reply = await self._orchestrator.fetch_messages(session)
            except AssistantClientError as e:
                logger.warning(f"Failed to fetch messages: {e}")
                return self._fail(session, fallbacks.empty_reply, e)

            if not reply.strip():
                logger.info("Assistant reply was empty")
                session.add_message(MessageSender.ASSISTANT, fallbacks.empty_reply)
                return TurnReply(content=fallbacks.empty_reply, success=False)

            session.add_message(MessageSender.ASSISTANT, reply)
            return TurnReply(content=reply, success=True)

    async def close(self) -> None:
        await self._transport.close()


# Module-level singleton instance
_chat_service: ChatService | None = None


def get_chat_service() -> ChatService:
    """Get or create the global chat service.

    Uses singleton pattern for resource efficiency.

    Returns:
        The ChatService instance.
    """
    global _chat_service
    if _chat_service is None:
        _chat_service = ChatService()
    return _chat_service


async def close_chat_service() -> None:
    """Close the global chat service if it was created."""
    global _chat_service
    if _chat_service is not None:
        await _chat_service.close()
        _chat_service = None
