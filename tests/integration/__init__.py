"""Integration tests for components working together as a system.

Coverage:
    - API endpoints with real HTTP requests through ASGITransport
    - Full conversation turn against the live assistant (when configured)

Live tests require ASSISTANT_API_KEY and ASSISTANT_ID.
"""
