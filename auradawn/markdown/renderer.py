# auradawn/markdown/renderer.py
"""
Markdown to HTML for post bodies.

A fresh ``markdown.Markdown`` instance is built per call; instances keep
per-document state (HTML stash, TOC tokens) and are not shared between
threads.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

import markdown
from markdown.extensions.toc import slugify_unicode

from ..conf import blog_settings
from .extensions import PostContentExtension
from .media_card import MediaCardExtension

logger = logging.getLogger(__name__)


@dataclass
class TocEntry:
    id: str
    name: str
    level: int


@dataclass
class RenderedMarkdown:
    html: str
    toc: List[TocEntry] = field(default_factory=list)


def _extension_configs() -> dict:
    configs = {
        "toc": {
            "slugify": slugify_unicode,
            "toc_depth": blog_settings.TOC_DEPTH,
        },
    }
    for name, options in blog_settings.MARKDOWN_EXTENSION_CONFIGS.items():
        configs.setdefault(name, {}).update(options)
    return configs


def build_markdown() -> markdown.Markdown:
    return markdown.Markdown(
        extensions=[
            *blog_settings.MARKDOWN_EXTENSIONS,
            MediaCardExtension(),
            PostContentExtension(),
        ],
        extension_configs=_extension_configs(),
        output_format="html",
    )


def flatten_toc(tokens: Iterable[dict]) -> List[TocEntry]:
    """Flatten the nested ``toc_tokens`` of the toc extension, in document order."""
    entries = []
    for token in tokens:
        entries.append(TocEntry(id=token["id"], name=token["name"], level=token["level"]))
        entries.extend(flatten_toc(token.get("children", [])))
    return entries


def render_markdown(text) -> RenderedMarkdown:
    """Render post Markdown to HTML plus a flat table of contents."""
    md = build_markdown()
    html = md.convert(text or "")
    toc = flatten_toc(getattr(md, "toc_tokens", []))
    logger.debug("Rendered %d characters of markdown (%d toc entries)", len(text or ""), len(toc))
    return RenderedMarkdown(html=html, toc=toc)
