"""Entry point for the TS Helper chat client.

Serves the session API and the chat page from one uvicorn process, or the chat
page alone with RUN_MODE=ui. Assistant credentials and the assistant id are
read from the environment or a .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# AssistantConfig reads os.environ at construction, so .env must be loaded first
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def serve() -> None:
    """Mount the chat page on the session API app and serve both."""
    import uvicorn
    from nicegui import ui

    from ts_helper.api.app import create_app
    from ts_helper.ui.chat_page import chat_page  # noqa: F401 - registers "/"

    app = create_app()
    ui.run_with(
        app,
        title="TS Helper",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "ts-helper-secret"),
    )

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    assistant_id = os.getenv("ASSISTANT_ID", "")
    if not assistant_id.strip():
        logger.warning("ASSISTANT_ID is not set; every turn will answer with a fallback")
    logger.info(f"Chat page on http://{host}:{port}/, sessions API under /sessions")

    uvicorn.run(app, host=host, port=port, log_level=os.getenv("LOG_LEVEL", "info").lower())


def main() -> None:
    mode = os.getenv("RUN_MODE", "integrated").lower()
    logger.info(f"Starting TS Helper ({mode})")

    if mode == "ui":
        from ts_helper.ui.chat_page import main as run_chat_page

        run_chat_page()
    else:
        serve()


if __name__ == "__main__":
    main()
