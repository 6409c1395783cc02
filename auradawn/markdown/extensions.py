# auradawn/markdown/extensions.py
"""
Presentation tweaks applied to every rendered post.

- An image that is the only content of its paragraph becomes a
  ``<figure>``; its title, if any, becomes the ``<figcaption>``.
- Images without a ``src`` are dropped.
- Ordinary block quotes get the ``post-blockquote`` class.
- Links open in a new tab and carry a small ``↗`` marker. In-page
  links (``#...``), such as footnote references, are left alone.
"""

from xml.etree import ElementTree as etree

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor


def _add_class(element, name):
    classes = element.get("class", "").split()
    if name not in classes:
        classes.append(name)
    element.set("class", " ".join(classes))


def _is_lone_image(paragraph):
    """True when the paragraph holds exactly one <img> and no text."""
    if len(paragraph) != 1 or paragraph[0].tag != "img":
        return False
    return not (paragraph.text or "").strip() and not (paragraph[0].tail or "").strip()


class PostContentTreeprocessor(Treeprocessor):

    def run(self, root):
        parents = {child: parent for parent in root.iter() for child in parent}

        for img in list(root.iter("img")):
            parent = parents[img]
            if not img.get("src"):
                self._drop(parent, img)
                continue
            img.set("loading", "lazy")
            if parent.tag == "p" and _is_lone_image(parent) and parent in parents:
                self._figure(parents[parent], parent, img)

        for blockquote in root.iter("blockquote"):
            _add_class(blockquote, "post-blockquote")

        for link in list(root.iter("a")):
            href = link.get("href", "")
            if not href or href.startswith("#"):
                continue
            link.set("target", "_blank")
            link.set("rel", "noopener noreferrer")
            _add_class(link, "post-link")
            marker = etree.SubElement(link, "span", {"class": "post-link-marker"})
            marker.text = "↗"

    def _drop(self, parent, img):
        index = list(parent).index(img)
        if img.tail:
            if index == 0:
                parent.text = (parent.text or "") + img.tail
            else:
                parent[index - 1].tail = (parent[index - 1].tail or "") + img.tail
        parent.remove(img)

    def _figure(self, container, paragraph, img):
        figure = etree.Element("figure", {"class": "post-figure"})
        figure.tail = paragraph.tail
        caption = img.attrib.pop("title", "")
        paragraph.remove(img)
        img.tail = None
        figure.append(img)
        if caption:
            figcaption = etree.SubElement(figure, "figcaption")
            figcaption.text = caption

        index = list(container).index(paragraph)
        container.remove(paragraph)
        container.insert(index, figure)


class PostContentExtension(Extension):

    def extendMarkdown(self, md):
        md.treeprocessors.register(PostContentTreeprocessor(md), "post_content", 13)


def makeExtension(**kwargs):
    return PostContentExtension(**kwargs)
