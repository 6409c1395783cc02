"""
Configuration settings for django-auradawn.

Override these in your Django settings.py:

    AURADAWN = {
        'POSTS_PER_PAGE': 20,
        'S3_BUCKET_NAME': 'blog-images',
        'S3_PUBLIC_DOMAIN': 'https://oss.example.com',
        ...
    }

Object storage settings default to the environment variables of the same
name (S3_BUCKET_NAME, S3_ENDPOINT, ...), so a deployment can configure the
bucket without touching settings.py.
"""
import os

from django.conf import settings

DEFAULTS = {
    # Public site
    "POSTS_PER_PAGE": 20,
    "HOME_POST_COUNT": 3,
    "SLUG_MAX_LENGTH": 255,
    "SITE_URL": os.environ.get("SITE_URL", "http://localhost:8000"),

    # Keys editable from the console settings page
    "SITE_SETTING_KEYS": [
        "site_title",
        "site_description",
        "author_name",
        "author_email",
    ],

    # Markdown
    "MARKDOWN_EXTENSIONS": ["extra", "toc", "sane_lists"],
    "MARKDOWN_EXTENSION_CONFIGS": {},
    "TOC_DEPTH": "1-2",
    "RENDER_CACHE_TIMEOUT": 3600,

    # Object storage (MinIO / R2 / S3)
    "S3_BUCKET_NAME": os.environ.get("S3_BUCKET_NAME", ""),
    "S3_ENDPOINT": os.environ.get("S3_ENDPOINT", ""),
    "S3_REGION": os.environ.get("S3_REGION", "us-east-1"),
    "S3_ACCESS_KEY_ID": os.environ.get("S3_ACCESS_KEY_ID", ""),
    "S3_SECRET_ACCESS_KEY": os.environ.get("S3_SECRET_ACCESS_KEY", ""),
    "S3_PUBLIC_DOMAIN": os.environ.get("S3_PUBLIC_DOMAIN", ""),
    "S3_FORCE_PATH_STYLE": True,
}


class AuraDawnSettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from auradawn.conf import blog_settings
    """

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid auradawn setting: {name}")

        user_settings = getattr(settings, "AURADAWN", {})
        return user_settings.get(name, DEFAULTS[name])


blog_settings = AuraDawnSettings()
