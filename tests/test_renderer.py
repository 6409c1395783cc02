"""
Tests for the Markdown rendering pipeline.
"""
from xml.etree import ElementTree as etree

import markdown

from auradawn.markdown import RenderedMarkdown, TocEntry, render_markdown
from auradawn.markdown.extensions import PostContentTreeprocessor
from auradawn.markdown.renderer import flatten_toc


class TestRenderMarkdown:

    def test_returns_rendered_markdown(self):
        rendered = render_markdown("Hello *world*")
        assert isinstance(rendered, RenderedMarkdown)
        assert rendered.html == "<p>Hello <em>world</em></p>"
        assert rendered.toc == []

    def test_empty_input(self):
        assert render_markdown("").html == ""
        assert render_markdown(None).html == ""

    def test_tables_from_extra(self):
        html = render_markdown("| a | b |\n|---|---|\n| 1 | 2 |").html
        assert "<table>" in html

    def test_fenced_code(self):
        html = render_markdown("```python\nprint('hi')\n```").html
        assert "<pre><code" in html
        assert "print(" in html


class TestPostContent:
    """Presentation tweaks applied to rendered posts."""

    def test_lone_image_becomes_figure(self):
        html = render_markdown('![Alt](https://example.com/a.png "A caption")').html
        assert '<figure class="post-figure">' in html
        assert "<figcaption>A caption</figcaption>" in html
        assert 'loading="lazy"' in html
        assert "<p><img" not in html
        assert 'title="A caption"' not in html

    def test_lone_image_without_title(self):
        html = render_markdown("![Alt](https://example.com/a.png)").html
        assert '<figure class="post-figure">' in html
        assert "<figcaption>" not in html

    def test_inline_image_stays_in_paragraph(self):
        html = render_markdown("Look ![icon](https://example.com/i.png) here").html
        assert "<figure" not in html
        assert 'loading="lazy"' in html

    def test_image_without_src_is_dropped(self):
        root = etree.Element("div")
        p = etree.SubElement(root, "p")
        p.text = "a "
        img = etree.SubElement(p, "img", {"alt": "broken"})
        img.tail = " b"

        PostContentTreeprocessor(markdown.Markdown()).run(root)

        assert p.find("img") is None
        assert p.text == "a  b"

    def test_external_link(self):
        html = render_markdown("[site](https://example.com)").html
        assert 'target="_blank"' in html
        assert 'rel="noopener noreferrer"' in html
        assert 'class="post-link"' in html
        assert '<span class="post-link-marker">↗</span>' in html

    def test_in_page_link_untouched(self):
        html = render_markdown("[top](#top)").html
        assert 'target="_blank"' not in html
        assert "post-link-marker" not in html


class TestTableOfContents:

    def test_toc_depth(self):
        rendered = render_markdown("# Title\n\n## Section\n\n### Deep\n\n## Other")
        assert rendered.toc == [
            TocEntry(id="title", name="Title", level=1),
            TocEntry(id="section", name="Section", level=2),
            TocEntry(id="other", name="Other", level=2),
        ]
        assert '<h2 id="section">' in rendered.html

    def test_unicode_headings(self):
        rendered = render_markdown("## 第一章")
        assert rendered.toc == [TocEntry(id="第一章", name="第一章", level=2)]

    def test_flatten_toc(self):
        tokens = [
            {"id": "a", "name": "A", "level": 1, "children": [
                {"id": "b", "name": "B", "level": 2, "children": []},
            ]},
            {"id": "c", "name": "C", "level": 1, "children": []},
        ]
        assert [entry.id for entry in flatten_toc(tokens)] == ["a", "b", "c"]

    def test_toc_depth_setting(self, settings):
        settings.AURADAWN = {**settings.AURADAWN, "TOC_DEPTH": "2-6"}
        rendered = render_markdown("# Title\n\n## Section")
        assert [entry.level for entry in rendered.toc] == [2]
