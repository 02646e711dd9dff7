"""Client for the hosted assistant REST API.

Proxies user turns to a remote, stateful assistant service.

Responsibilities:
    - HTTP transport with fixed headers and error-envelope detection
    - Thread, message, run and fetch sequencing per conversation session
    - Run status polling with bounded exponential backoff
    - Mapping of failures to user-facing fallback messages

Keeps the UI and HTTP layers free of request details.
"""

from ts_helper.client.config import AssistantConfig, FallbackMessages, get_assistant_config
from ts_helper.client.errors import (
    APIError,
    AssistantClientError,
    DecodeError,
    NetworkError,
    PreconditionError,
    RunStatusError,
)
from ts_helper.client.orchestrator import (
    ChainState,
    ConversationOrchestrator,
    ConversationSession,
    extract_reply,
)
from ts_helper.client.service import ChatService, get_chat_service
from ts_helper.client.transport import AssistantTransport

__all__ = [
    "APIError",
    "AssistantClientError",
    "AssistantConfig",
    "AssistantTransport",
    "ChainState",
    "ChatService",
    "ConversationOrchestrator",
    "ConversationSession",
    "DecodeError",
    "FallbackMessages",
    "NetworkError",
    "PreconditionError",
    "RunStatusError",
    "extract_reply",
    "get_assistant_config",
    "get_chat_service",
]
