"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Disclaimer that must be accepted before chatting
    - Thread setup with greeting or failure notice
    - Chat bubbles with clickable links in assistant replies
    - Typing indicator while a turn is in flight

Contains minimal business logic. Delegates all operations to the chat service.
"""
