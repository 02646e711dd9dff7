"""Test package for TS Helper.

Structure:
    - unit/: Decoder, transport, orchestrator, service and config tests
    - integration/: HTTP API tests and live assistant tests

The hosted assistant is replaced by a scripted httpx MockTransport except in
the live tests, which need real credentials.
Leverages pytest with pytest-check for soft assertions.
"""
