# auradawn/markdown/widgets.py
"""
Rendering stage for ``<media-card>`` elements.

Each element produced by ``MediaCardTreeprocessor`` is rendered with the
``auradawn/includes/media_card.html`` template and stashed as raw HTML.
Elements whose type is not recognised render as nothing.
"""

import math
from xml.etree import ElementTree as etree

from django.template.loader import render_to_string
from markdown.treeprocessors import Treeprocessor

from .media_card import MEDIA_CARD_TAG, MediaCard, MediaType, replace_element

MEDIA_CARD_TEMPLATE = "auradawn/includes/media_card.html"

LABELS = {
    MediaType.BOOK: "读书",
    MediaType.MOVIE: "观影",
    MediaType.MUSIC: "听歌",
    MediaType.GAME: "游戏",
    MediaType.TV: "剧集",
}

# (marker, tone) pairs checked in order; first substring hit wins
STATUS_TONES = (
    (("在", "ing"), "active"),
    (("完", "Done"), "done"),
    (("想", "Todo"), "todo"),
    (("弃", "Drop"), "dropped"),
)

MAX_STARS = 5


def status_tone(status):
    """Map a free-text status like "在读" or "Reading" to a colour tone."""
    for markers, tone in STATUS_TONES:
        if any(marker in status for marker in markers):
            return tone
    return "neutral"


def has_rating(rating):
    # NaN compares False, so an unparseable rating is hidden
    return rating > 0


def star_states(rating):
    """Return MAX_STARS booleans, True for each filled star."""
    filled = math.floor(min(rating, MAX_STARS) + 0.5) if has_rating(rating) else 0
    return [index < filled for index in range(MAX_STARS)]


def format_rating(rating):
    """One decimal place; an infinite rating reads "Infinity"."""
    if math.isinf(rating):
        return "Infinity"
    return f"{rating:.1f}"


def media_card_context(card):
    return {
        "card": card,
        "kind": card.type.value.lower(),
        "label": LABELS[card.type],
        "status_tone": status_tone(card.status) if card.status else "",
        "show_rating": has_rating(card.rating),
        "rating_display": format_rating(card.rating) if has_rating(card.rating) else "",
        "stars": star_states(card.rating),
        "paragraphs": [line for line in card.comment.split("\n") if line.strip()],
    }


def render_media_card(card):
    """Render a MediaCard to an HTML string."""
    return render_to_string(MEDIA_CARD_TEMPLATE, media_card_context(card)).strip()


class MediaCardRenderer(Treeprocessor):
    """Swap ``<media-card>`` elements for their widget markup."""

    def run(self, root):
        parents = {child: parent for parent in root.iter() for child in parent}

        for element in list(root.iter(MEDIA_CARD_TAG)):
            parent = parents[element]
            card = MediaCard.from_attrib(element.attrib)
            if card is None:
                index = list(parent).index(element)
                if element.tail:
                    _append_text(parent, index, element.tail)
                parent.remove(element)
                continue

            placeholder = etree.Element("p")
            placeholder.text = self.md.htmlStash.store(render_media_card(card))
            replace_element(parent, element, placeholder)


def _append_text(parent, index, text):
    """Attach ``text`` after the child before ``index`` (or to the parent)."""
    if index == 0:
        parent.text = (parent.text or "") + text
    else:
        previous = parent[index - 1]
        previous.tail = (previous.tail or "") + text
