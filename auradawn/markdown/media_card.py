# auradawn/markdown/media_card.py
"""
Media cards: block quotes that describe a book, film, album, game or show.

Syntax:

    > [!BOOK] 百年孤独
    > cover: https://example.com/cover.jpg
    > rating: 4.5
    > 作者: 加西亚·马尔克斯
    > 状态: 在读
    > 简评: 魔幻现实主义的开山之作。
    > 值得反复阅读。

The first line names the kind (BOOK, MOVIE, MUSIC, GAME or TV, any case)
and the title. Following lines are ``key: value`` fields; keys accept an
ASCII colon or a full-width colon. Lines after ``comment:`` that are not
themselves fields continue the comment. Anything else is ignored.

``MediaCardTreeprocessor`` replaces every matching ``<blockquote>`` with a
``<media-card>`` element whose attributes hold the parsed record. Block
quotes that do not match are left alone. Turning ``<media-card>`` into
markup is the job of ``auradawn.markdown.widgets``.
"""

import enum
import math
import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple
from xml.etree import ElementTree as etree

from markdown.blockprocessors import BlockQuoteProcessor
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor
from markdown.util import ETX, STX

MEDIA_CARD_TAG = "media-card"

_HEADER_RE = re.compile(r"^\s*\[!\s*(BOOK|MOVIE|MUSIC|GAME|TV)\s*\]\s*(.*)", re.IGNORECASE)
# Leading number of a rating value: "4.5", "4.5/5", "-1", ".5", "Infinity"
_NUMBER_RE = re.compile(r"^[+-]?(?:Infinity|(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")
# Elements whose text ends a line of the block quote
_LINE_END_TAGS = {"p", "li", "pre", "h1", "h2", "h3", "h4", "h5", "h6"}
# Backslash escapes are held as STX<ord>ETX until the unescape treeprocessor runs
_ESCAPED_RE = re.compile(f"{STX}([0-9]+){ETX}")


class MediaType(enum.Enum):
    BOOK = "BOOK"
    MOVIE = "MOVIE"
    MUSIC = "MUSIC"
    GAME = "GAME"
    TV = "TV"


class Field(enum.Enum):
    """The field currently being read; only COMMENT accepts continuation lines."""

    NONE = "none"
    COVER = "cover"
    RATING = "rating"
    AUTHOR = "author"
    STATUS = "status"
    COMMENT = "comment"


FIELD_KEYS = (
    (Field.COVER, ("cover",)),
    (Field.RATING, ("rating",)),
    (Field.AUTHOR, ("author", "作者")),
    (Field.STATUS, ("status", "状态", "进度")),
    (Field.COMMENT, ("comment", "简评")),
)

SEPARATORS = (":", "：")


@dataclass
class MediaCard:
    type: MediaType
    title: str = ""
    cover: str = ""
    rating: float = 0.0
    author: str = ""
    status: str = ""
    comment: str = ""

    def to_attrib(self) -> dict:
        """Return the record as string attributes for a tree element."""
        return {
            "type": self.type.value,
            "title": self.title,
            "cover": self.cover,
            "rating": repr(self.rating),
            "author": self.author,
            "status": self.status,
            "comment": self.comment,
        }

    @classmethod
    def from_attrib(cls, attrib: dict) -> Optional["MediaCard"]:
        """Rebuild a record from element attributes; None for an unknown type."""
        try:
            media_type = MediaType(attrib.get("type", "").upper())
        except ValueError:
            return None
        try:
            rating = float(attrib.get("rating", "0"))
        except ValueError:
            rating = math.nan
        return cls(
            type=media_type,
            title=attrib.get("title", ""),
            cover=attrib.get("cover", ""),
            rating=rating,
            author=attrib.get("author", ""),
            status=attrib.get("status", ""),
            comment=attrib.get("comment", ""),
        )


def _unescape(text: str) -> str:
    return _ESCAPED_RE.sub(lambda m: chr(int(m.group(1))), text)


def _iter_text(element: etree.Element) -> Iterator[str]:
    if element.tag == "br":
        yield "\n"
    elif element.text:
        yield element.text
    for child in element:
        yield from _iter_text(child)
        if child.tail:
            yield child.tail
    if element.tag in _LINE_END_TAGS:
        yield "\n"


def flatten_text(element: etree.Element) -> str:
    """
    Return the text of ``element`` as the author typed it.

    Paragraphs, list items, headings and code blocks end with a newline and
    ``<br>`` becomes a newline, so the lines of the result are the lines of
    the original block quote.
    """
    parts = []
    for child in element:
        parts.extend(_iter_text(child))
    return _unescape("".join(parts)).strip()


def parse_rating(value: str) -> float:
    """Parse the leading number of ``value``; NaN when there is none."""
    match = _NUMBER_RE.match(value.strip())
    if not match:
        return math.nan
    return float(match.group(0))


def match_field(line: str) -> Optional[Tuple[Field, str]]:
    """Return ``(field, value)`` when ``line`` starts with a field key."""
    lower = line.lower()
    for field, keys in FIELD_KEYS:
        for key in keys:
            for separator in SEPARATORS:
                prefix = key + separator
                if lower.startswith(prefix):
                    return field, line[len(prefix):].strip()
    return None


def parse_media_card(text: str) -> Optional[MediaCard]:
    """
    Parse flattened block quote text into a MediaCard.

    Returns None when the first line is not a ``[!TYPE] title`` header.
    """
    lines = [line.strip() for line in text.strip().split("\n")]
    header = _HEADER_RE.match(lines[0])
    if not header:
        return None

    card = MediaCard(type=MediaType(header.group(1).upper()), title=header.group(2))
    current = Field.NONE

    for line in lines[1:]:
        matched = match_field(line)
        if matched is None:
            if current is Field.COMMENT:
                card.comment = f"{card.comment}\n{line}" if card.comment else line
            continue

        current, value = matched
        if current is Field.COVER:
            card.cover = value
        elif current is Field.RATING:
            card.rating = parse_rating(value)
        elif current is Field.AUTHOR:
            card.author = value
        elif current is Field.STATUS:
            card.status = value
        elif current is Field.COMMENT:
            card.comment = value

    return card


def replace_element(parent: etree.Element, old: etree.Element, new: etree.Element) -> None:
    """Put ``new`` where ``old`` was, keeping the tail text."""
    index = list(parent).index(old)
    new.tail = old.tail
    parent.remove(old)
    parent.insert(index, new)


class MediaCardTreeprocessor(Treeprocessor):
    """Replace media card block quotes with ``<media-card>`` elements."""

    def run(self, root: etree.Element) -> None:
        parents = {child: parent for parent in root.iter() for child in parent}
        cards: List[Tuple[etree.Element, MediaCard]] = []

        for blockquote in root.iter("blockquote"):
            card = parse_media_card(flatten_text(blockquote))
            if card is not None:
                cards.append((blockquote, card))

        for blockquote, card in cards:
            parent = parents.get(blockquote)
            if parent is None:
                continue
            replace_element(parent, blockquote, etree.Element(MEDIA_CARD_TAG, card.to_attrib()))


class SeparateBlockQuoteProcessor(BlockQuoteProcessor):
    """
    Start a new ``<blockquote>`` for every quoted block, so quotes
    separated by a blank line stay separate quotes.
    """

    def run(self, parent, blocks):
        block = blocks.pop(0)
        m = self.RE.search(block)
        if m:
            self.parser.parseBlocks(parent, [block[:m.start()]])
            block = "\n".join(self.clean(line) for line in block[m.start():].split("\n"))
        quote = etree.SubElement(parent, "blockquote")
        self.parser.state.set("blockquote")
        self.parser.parseChunk(quote, block)
        self.parser.state.reset()


class MediaCardExtension(Extension):
    """Recognise media cards and render them as widgets."""

    def extendMarkdown(self, md):
        from .widgets import MediaCardRenderer

        md.parser.blockprocessors.register(SeparateBlockQuoteProcessor(md.parser), "quote", 20)
        # After inline patterns (20) so link/emphasis text is final, before prettify (10)
        md.treeprocessors.register(MediaCardTreeprocessor(md), "media_card", 15)
        md.treeprocessors.register(MediaCardRenderer(md), "media_card_render", 14)


def makeExtension(**kwargs):
    return MediaCardExtension(**kwargs)
