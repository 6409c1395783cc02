"""
Models for django-auradawn.

All models are importable from auradawn.models:

    from auradawn.models import Post, Category, Tag, Asset, SiteConfig
"""
from .posts import Category, Tag, Post
from .media import Asset
from .site import SiteConfig

__all__ = [
    # Posts
    "Category",
    "Tag",
    "Post",
    # Media
    "Asset",
    # Site
    "SiteConfig",
]
