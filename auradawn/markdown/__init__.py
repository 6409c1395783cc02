"""
Markdown rendering for auradawn posts.

    from auradawn.markdown import render_markdown

    rendered = render_markdown(post.content)
    rendered.html, rendered.toc
"""
from .media_card import MediaCard, MediaType, parse_media_card
from .renderer import RenderedMarkdown, TocEntry, render_markdown

__all__ = [
    "MediaCard",
    "MediaType",
    "parse_media_card",
    "RenderedMarkdown",
    "TocEntry",
    "render_markdown",
]
