# auradawn/templatetags/markdown_tags.py

from django import template
from django.utils.safestring import mark_safe

from auradawn.markdown import render_markdown

register = template.Library()


@register.filter(name="markdown")
def markdown_filter(value):
    return mark_safe(render_markdown(value).html)


@register.inclusion_tag("auradawn/includes/toc.html")
def post_toc(rendered):
    """Table of contents for a RenderedMarkdown; nothing when it has no headings."""
    return {"entries": rendered.toc}
