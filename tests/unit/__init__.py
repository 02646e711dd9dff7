"""Unit tests for individual components in isolation.

Coverage:
    - models/: Remote record decoding, including the string-or-object text field
    - client/: Transport error handling, chain sequencing, run polling, fallbacks
    - ui/: Link formatting

The assistant service is simulated with httpx.MockTransport.
"""
