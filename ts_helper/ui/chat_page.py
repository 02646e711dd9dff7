"""NiceGUI chat interface for the TS Helper assistant."""

import logging

from nicegui import ui

from ts_helper.client.errors import AssistantClientError
from ts_helper.client.orchestrator import ConversationSession
from ts_helper.client.service import get_chat_service
from ts_helper.models import ChatMessage, MessageSender
from ts_helper.ui.formatting import linkify

logger = logging.getLogger(__name__)

DISCLAIMER_TEXT = (
    "This application provides information about Tourette's Syndrome for "
    "educational purposes only. It is not intended to be a substitute for "
    "professional medical advice, diagnosis, or treatment. Always seek the "
    "advice of your physician or other qualified health provider with any "
    "questions you may have regarding a medical condition."
)

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/icon?family=Material+Icons" rel="stylesheet">
<style>
    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .message-user {
        background: rgba(59, 209, 199, 0.4);
        border-radius: 10px;
    }

    .message-assistant {
        background: rgba(128, 128, 128, 0.2);
        border-radius: 10px;
    }

    .avatar-assistant { background: #3bd1c7; }

    .send-btn { background: #3bd1c7 !important; }
</style>
"""


class PageState:
    """Per-visit UI state around the conversation session."""

    def __init__(self) -> None:
        self.session: ConversationSession | None = None
        self.notices: list[ChatMessage] = []
        self.assistant_ready: bool = False
        self.is_typing: bool = False

    @property
    def messages(self) -> list[ChatMessage]:
        if self.session is None:
            return self.notices
        return self.notices + self.session.messages


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    state = PageState()

    messages_container: ui.column
    input_field: ui.input
    send_btn: ui.button

    def render_avatar() -> None:
        with ui.element("div").classes(
            "w-10 h-10 rounded-full flex items-center justify-center avatar-assistant"
        ):
            ui.icon("psychology").classes("text-white text-lg")

    def render_message(msg: ChatMessage) -> None:
        if msg.sender == MessageSender.USER:
            with ui.row().classes("w-full justify-end px-2"):
                ui.label(msg.content).classes("message-user p-2.5 text-sm max-w-[75%]")
            return

        with ui.row().classes("w-full justify-start gap-2 items-end px-2"):
            render_avatar()
            with ui.element("div").classes("message-assistant p-2.5 max-w-[75%]"):
                ui.html(linkify(msg.content), sanitize=False).classes("text-sm")

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not state.assistant_ready and not state.notices:
                ui.label("Setting up thread...").classes("p-4 text-gray-500")
            for msg in state.messages:
                render_message(msg)
            if state.is_typing:
                with ui.row().classes("w-full justify-start gap-2 items-end px-2"):
                    render_avatar()
                    ui.label("...").classes("message-assistant p-2.5 text-sm")

    async def setup_thread() -> None:
        service = get_chat_service()
        try:
            state.session = await service.create_session()
        except AssistantClientError:
            state.notices.append(
                ChatMessage(sender=MessageSender.ASSISTANT, content=service.thread_failed_message)
            )
        else:
            state.assistant_ready = True
            state.notices.append(
                ChatMessage(sender=MessageSender.ASSISTANT, content=service.greeting)
            )
            send_btn.enable()
        refresh_messages()

    async def send() -> None:
        text = (input_field.value or "").strip()
        if not text or state.session is None or state.is_typing:
            return

        input_field.value = ""
        state.is_typing = True
        send_btn.disable()
        refresh_messages()

        try:
            await get_chat_service().send_turn(state.session, text)
        finally:
            state.is_typing = False
            send_btn.enable()
            refresh_messages()

    def accept_disclaimer() -> None:
        disclaimer.close()
        ui.timer(0.1, setup_thread, once=True)

    # === Disclaimer ===
    with ui.dialog().props("persistent maximized") as disclaimer, ui.card().classes(
        "items-center justify-center p-8"
    ):
        ui.markdown("**Disclaimer**").classes("text-lg")
        ui.label(DISCLAIMER_TEXT).classes("text-center max-w-xl")
        ui.button("I Understand and Accept", on_click=accept_disclaimer).classes(
            "send-btn text-white w-full max-w-xl"
        )

    # === UI Layout ===
    with ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
        "height: calc(100vh - 2rem)"
    ):
        with ui.scroll_area().classes("flex-grow w-full"):
            messages_container = ui.column().classes("w-full gap-2.5 py-2")

        with ui.row().classes("w-full p-4 gap-3 items-center border-t"):
            input_field = (
                ui.input(placeholder="Type here...")
                .props("outlined dense")
                .classes("flex-grow")
                .on("keydown.enter", send)
            )
            send_btn = ui.button("Send", on_click=send).classes("send-btn text-white")
            send_btn.disable()

    refresh_messages()
    disclaimer.open()


def main() -> None:
    ui.run(title="TS Helper", port=8080, reload=False)


if __name__ == "__main__":
    main()
