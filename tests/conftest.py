"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - config: AssistantConfig pointing at a fake base URL, with no poll delay
    - fake_api: Scripted stand-in for the hosted assistant service
    - http_client: httpx client wired to fake_api through MockTransport
    - transport / orchestrator / chat_service: the client stack under test
    - happy_api: fake_api scripted for one successful turn
    - async_client: HTTPX client for the FastAPI app, backed by chat_service
"""

import asyncio
from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from ts_helper.api import app
from ts_helper.client.config import AssistantConfig
from ts_helper.client.orchestrator import ConversationOrchestrator
from ts_helper.client.service import ChatService, get_chat_service
from ts_helper.client.transport import AssistantTransport

BASE_URL = "https://assistant.test/v1"
THREAD_ID = "thread_t1"
ASSISTANT_ID = "asst_test"


def thread_payload(thread_id: str = THREAD_ID) -> dict[str, Any]:
    return {
        "id": thread_id,
        "object": "thread",
        "created_at": 1718000000,
        "metadata": {},
        "tool_resources": {"code_interpreter": {"file_ids": []}},
    }


def message_payload(
    role: str,
    content: list[dict[str, Any]],
    message_id: str = "msg_1",
    thread_id: str = THREAD_ID,
) -> dict[str, Any]:
    return {
        "id": message_id,
        "object": "thread.message",
        "created_at": 1718000001,
        "assistant_id": ASSISTANT_ID if role == "assistant" else None,
        "thread_id": thread_id,
        "run_id": "run_1" if role == "assistant" else None,
        "role": role,
        "content": content,
        "attachments": [],
        "metadata": {},
    }


def text_part(value: str) -> dict[str, Any]:
    return {"type": "text", "text": {"value": value, "annotations": []}}


def run_payload(status: str, run_id: str = "run_1", **extra: Any) -> dict[str, Any]:
    return {
        "id": run_id,
        "object": "thread.run",
        "created_at": 1718000002,
        "assistant_id": ASSISTANT_ID,
        "thread_id": THREAD_ID,
        "status": status,
        "model": "gpt-4o-mini",
        **extra,
    }


def message_list_payload(messages: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "object": "list",
        "data": messages,
        "first_id": messages[0]["id"] if messages else None,
        "last_id": messages[-1]["id"] if messages else None,
        "has_more": False,
    }


def error_payload(
    message: str = "invalid_request", error_type: str = "invalid_request_error"
) -> dict[str, Any]:
    return {"error": {"message": message, "type": error_type, "param": None, "code": None}}


class FakeAssistantAPI:
    """Scripted stand-in for the hosted assistant service.

    Responses are queued per (method, path). The last queued response for a
    route is repeated once the queue runs down to it. A queued exception is
    raised instead of answering, to simulate transport failures. A non-zero
    ``latency`` makes every answer wait on the event loop first.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.latency = 0.0
        self._routes: dict[tuple[str, str], list[tuple[int, Any]]] = {}

    def queue(self, method: str, path: str, payload: Any, status_code: int = 200) -> None:
        self._routes.setdefault((method, path), []).append((status_code, payload))

    def replace(self, method: str, path: str, payload: Any, status_code: int = 200) -> None:
        """Drop whatever is scripted for a route and answer with ``payload``."""
        self._routes[(method, path)] = [(status_code, payload)]

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and r.url.path.removeprefix("/v1") == path
        ]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.latency:
            await asyncio.sleep(self.latency)
        key = (request.method, request.url.path.removeprefix("/v1"))
        queued = self._routes.get(key)
        if not queued:
            return httpx.Response(404, json=error_payload("No such route", "not_found"))

        status_code, payload = queued.pop(0) if len(queued) > 1 else queued[0]
        if isinstance(payload, Exception):
            raise payload
        if isinstance(payload, (str, bytes)):
            return httpx.Response(status_code, content=payload)
        return httpx.Response(status_code, json=payload)


@pytest.fixture
def config() -> AssistantConfig:
    """Client configuration for tests: fake host, no delays between polls."""
    return AssistantConfig(
        api_key="sk-test-key",
        assistant_id=ASSISTANT_ID,
        base_url=BASE_URL,
        poll_interval=0.0,
        poll_max_interval=0.0,
        poll_max_attempts=3,
    )


@pytest.fixture
def fake_api() -> FakeAssistantAPI:
    return FakeAssistantAPI()


@pytest.fixture
def happy_api(fake_api: FakeAssistantAPI) -> FakeAssistantAPI:
    """Fake service scripted for one successful turn on thread_t1."""
    fake_api.queue("POST", "/threads", thread_payload())
    fake_api.queue(
        "POST",
        f"/threads/{THREAD_ID}/messages",
        message_payload("user", [{"type": "text", "text": "hello"}]),
    )
    fake_api.queue("POST", f"/threads/{THREAD_ID}/runs", run_payload("queued"))
    fake_api.queue("GET", f"/threads/{THREAD_ID}/runs/run_1", run_payload("completed"))
    fake_api.queue(
        "GET",
        f"/threads/{THREAD_ID}/messages",
        message_list_payload(
            [
                message_payload("user", [text_part("hello")], message_id="msg_1"),
                message_payload(
                    "assistant", [{"type": "text", "text": "Hi there"}], message_id="msg_2"
                ),
            ]
        ),
    )
    return fake_api


@pytest.fixture
async def http_client(fake_api: FakeAssistantAPI) -> AsyncGenerator[httpx.AsyncClient]:
    """Create an httpx client whose requests are answered by fake_api.

    Yields:
        AsyncClient on MockTransport.
    """
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_api.handler)) as client:
        yield client


@pytest.fixture
def transport(config: AssistantConfig, http_client: httpx.AsyncClient) -> AssistantTransport:
    return AssistantTransport(config, client=http_client)


@pytest.fixture
def orchestrator(
    transport: AssistantTransport, config: AssistantConfig
) -> ConversationOrchestrator:
    return ConversationOrchestrator(transport, config)


@pytest.fixture
def chat_service(config: AssistantConfig, transport: AssistantTransport) -> ChatService:
    return ChatService(config=config, transport=transport)


@pytest.fixture
async def async_client(chat_service: ChatService) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    The app's chat service is replaced by one talking to fake_api.

    Yields:
        Configured AsyncClient for making test requests.
    """
    app.dependency_overrides[get_chat_service] = lambda: chat_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
