"""FastAPI endpoints for the TS Helper chat relay.

HTTP routes for clients that cannot call the assistant service directly,
such as the mobile app.

Endpoints:
    - GET /health: Service health status
    - POST /sessions: Create a conversation thread
    - POST /sessions/{thread_id}/turns: Send a message, receive the reply
"""

from ts_helper.api.app import app, create_app

__all__ = ["app", "create_app"]
