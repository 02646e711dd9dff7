"""Assistant client configuration with environment variable loading.

Pydantic-based configuration for the hosted assistant API client.
Credentials and the assistant identifier are deployment settings read from
the environment (or a .env file).
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_BETA_HEADER = "assistants=v2"


class FallbackMessages(BaseModel):
    """User-facing texts shown in place of an assistant reply.

    Attributes:
        greeting: Opening assistant line shown once the thread is ready.
        thread_failed: Shown when the conversation thread cannot be created.
        send_failed: Shown when the user message cannot be posted.
        run_failed: Shown when the run cannot be started or does not complete.
        empty_reply: Shown when results cannot be fetched or are blank.
        no_assistant_reply: Returned when the thread holds no assistant message.
    """

    greeting: str = (
        "Hi! How can I assist you today? I can provide information about "
        "Tourette's Syndrome, explain CBIT, give advice on competing behaviors "
        "for tics, and help with school, work, friends, or anything else "
        "TS-related."
    )
    thread_failed: str = "Failed to create thread."
    send_failed: str = "Failed to send the message."
    run_failed: str = "Failed to process the message."
    empty_reply: str = "I'm sorry, I didn't catch that. Could you please rephrase?"
    no_assistant_reply: str = "No response from assistant."


class AssistantConfig(BaseModel):
    """Configuration for the hosted assistant client.

    Attributes:
        api_key: Bearer token for the assistant API.
        assistant_id: Identifier of the assistant that runs are bound to.
        base_url: API base URL.
        beta_header: Value sent in the OpenAI-Beta header.
        timeout: Per-request timeout in seconds.
        poll_interval: Delay before the first run status check, in seconds.
        poll_backoff: Multiplier applied to the delay after each check.
        poll_max_interval: Ceiling for the delay between checks.
        poll_max_attempts: Number of status checks before giving up.
        fallbacks: User-facing texts for failures.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("ASSISTANT_API_KEY", os.getenv("OPENAI_API_KEY", "")),
        description="Bearer token for the assistant API",
    )
    assistant_id: str = Field(
        default_factory=lambda: os.getenv("ASSISTANT_ID", ""),
        description="Assistant that processes each run",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("ASSISTANT_BASE_URL") or DEFAULT_BASE_URL,
        description="API base URL",
    )
    beta_header: str = Field(
        default_factory=lambda: os.getenv("ASSISTANT_BETA_HEADER") or DEFAULT_BETA_HEADER,
        description="Service version marker",
    )
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("ASSISTANT_TIMEOUT", "60")),
        gt=0.0,
        description="Per-request timeout in seconds",
    )
    poll_interval: float = Field(
        default_factory=lambda: float(os.getenv("RUN_POLL_INTERVAL", "1.0")),
        ge=0.0,
        description="Initial delay between run status checks",
    )
    poll_backoff: float = Field(
        default_factory=lambda: float(os.getenv("RUN_POLL_BACKOFF", "2.0")),
        ge=1.0,
        description="Backoff multiplier between run status checks",
    )
    poll_max_interval: float = Field(
        default_factory=lambda: float(os.getenv("RUN_POLL_MAX_INTERVAL", "8.0")),
        ge=0.0,
        description="Maximum delay between run status checks",
    )
    poll_max_attempts: int = Field(
        default_factory=lambda: int(os.getenv("RUN_POLL_MAX_ATTEMPTS", "10")),
        ge=1,
        le=100,
        description="Run status checks before giving up",
    )
    fallbacks: FallbackMessages = Field(default_factory=FallbackMessages)

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError(
                "API key required. Set ASSISTANT_API_KEY or OPENAI_API_KEY in .env"
            )
        return v.strip()

    @field_validator("assistant_id")
    @classmethod
    def strip_assistant_id(cls, v: str) -> str:
        """Strip whitespace; emptiness is reported when a run needs the id."""
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


def get_assistant_config() -> AssistantConfig:
    """Create assistant configuration from environment.

    Returns:
        Configured AssistantConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return AssistantConfig()
