"""Text-to-HTML helpers for chat bubbles."""

import html
import re

URL_PATTERN = re.compile(r"(https?://[\w-]+(\.[\w-]+)+(/[\w\-./?%&=]*)?)")


def find_links(text: str) -> list[str]:
    """Return the URLs found in ``text``, in order of appearance."""
    return [match.group(0) for match in URL_PATTERN.finditer(text)]


def linkify(text: str) -> str:
    """Escape ``text`` for HTML and turn bare URLs into clickable links.

    Newlines are preserved as <br>.
    """
    parts: list[str] = []
    last = 0
    for match in URL_PATTERN.finditer(text):
        parts.append(html.escape(text[last : match.start()]))
        url = html.escape(match.group(0), quote=True)
        parts.append(f'<a href="{url}" class="text-teal-700 underline" target="_blank">{url}</a>')
        last = match.end()
    parts.append(html.escape(text[last:]))
    return "".join(parts).replace("\n", "<br>")
