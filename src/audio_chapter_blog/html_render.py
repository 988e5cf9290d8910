from __future__ import annotations

import re
from html import escape
from typing import List, Optional

from .models import Post

_HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+)$")
_LIST_ITEM_PATTERN = re.compile(r"^\s*(?:(?P<bullet>[-*+])|\d+[.)])\s+(?P<text>.+)$")
_BOLD_PATTERN = re.compile(r"\*\*(.+?)\*\*")

# Headings inside the summary sit below the post's own <h2> sections.
_HEADING_OFFSET = 2


def _inline_html(text: str) -> str:
    return _BOLD_PATTERN.sub(r"<strong>\1</strong>", escape(" ".join(text.split())))


def render_summary_html(summary: str) -> str:
    """Render a model-written summary (plain text or light markdown) as HTML.

    Consecutive lines form one paragraph; ``#`` headings, ``-``/``1.`` list
    items and ``**bold**`` spans are understood. Everything else is escaped.
    """

    blocks: List[str] = []
    paragraph: List[str] = []
    list_tag: Optional[str] = None
    list_items: List[str] = []

    def close_paragraph() -> None:
        if paragraph:
            blocks.append(f"<p>{_inline_html(' '.join(paragraph))}</p>")
            paragraph.clear()

    def close_list() -> None:
        nonlocal list_tag
        if list_tag and list_items:
            blocks.append(f"<{list_tag}>{''.join(list_items)}</{list_tag}>")
        list_tag = None
        list_items.clear()

    for line in summary.splitlines():
        stripped = line.strip()
        heading = _HEADING_PATTERN.match(stripped)
        item = None if heading else _LIST_ITEM_PATTERN.match(line)

        if item:
            close_paragraph()
            tag = "ul" if item.group("bullet") else "ol"
            if list_tag != tag:
                close_list()
                list_tag = tag
            list_items.append(f"<li>{_inline_html(item.group('text'))}</li>")
            continue

        close_list()
        if heading:
            close_paragraph()
            level = min(len(heading.group(1)) + _HEADING_OFFSET, 6)
            blocks.append(f"<h{level}>{_inline_html(heading.group(2))}</h{level}>")
        elif stripped:
            paragraph.append(stripped)
        else:
            close_paragraph()

    close_paragraph()
    close_list()
    return "\n".join(blocks)


def render_transcript_html(text: str) -> str:
    paragraphs = [block.strip() for block in re.split(r"\n\s*\n", text) if block.strip()]
    return "\n".join(f"<p>{escape(block)}</p>" for block in paragraphs)


def build_post(title: str, chapter_summary: str, transcript_text: str, audio_url: str) -> Post:
    sections = [
        "<h2>Chapter Summary</h2>",
        render_summary_html(chapter_summary),
        "<h2>Full Transcription</h2>",
        render_transcript_html(transcript_text),
        "<h2>Audio File</h2>",
        f'<a href="{escape(audio_url, quote=True)}">Download Audio</a>',
    ]
    return Post(title=title, html="\n".join(section for section in sections if section))


__all__ = ["build_post", "render_summary_html", "render_transcript_html"]
