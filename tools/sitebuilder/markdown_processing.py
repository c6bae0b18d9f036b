from __future__ import annotations

import mistune

from .config import (
    EXCERPT_BLANK,
    EXCERPT_BOLD,
    EXCERPT_CODE,
    EXCERPT_HEADING,
    EXCERPT_ITALIC,
    EXCERPT_LENGTH,
    EXCERPT_LINK,
)

# GFM flavour: tables, ~~strike~~ and bare-URL autolinks on top of the
# CommonMark core (fenced code included). Single newlines stay soft and raw
# HTML passes through untouched.
_MARKDOWN = mistune.create_markdown(
    escape=False,
    hard_wrap=False,
    plugins=["table", "strikethrough", "url"],
)


def render_markdown(md: str) -> str:
    return _MARKDOWN(md)


def generate_excerpt(md: str, length: int = EXCERPT_LENGTH) -> str:
    """
    Plain-text summary of raw markdown.

    Heading markers, bold/italic/code markers and link targets are dropped,
    line breaks collapse to spaces. Longer results are cut at ``length``
    characters and get a trailing ``...``.
    """
    text = EXCERPT_HEADING.sub("", md)
    text = EXCERPT_BOLD.sub(r"\1", text)
    text = EXCERPT_ITALIC.sub(r"\1", text)
    text = EXCERPT_CODE.sub(r"\1", text)
    text = EXCERPT_LINK.sub(r"\1", text)
    text = EXCERPT_BLANK.sub(" ", text)
    text = text.replace("\n", " ").strip()
    if len(text) > length:
        return text[:length].strip() + "..."
    return text
