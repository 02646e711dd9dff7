"""TS Helper - chat client for a hosted Tourette's Syndrome assistant.

Combines httpx for the assistant API, FastAPI for the HTTP relay,
NiceGUI for the chat page, and Pydantic for data validation.

Components:
    - client: Transport, conversation orchestration and chat service
    - models: Transcript, API and remote-record schemas
    - api: HTTP endpoints for remote UIs
    - ui: Web interface for chat interactions
"""

__version__ = "0.1.0"
