"""
django-auradawn - A personal blogging platform for Django.

Features:
- Markdown posts with categories, tags and cover images
- Media cards: ``> [!BOOK] Title`` block quotes rendered as book/film/music cards
- Media library backed by an S3-compatible object store (MinIO, R2, S3)
- Staff-only admin console and a small JSON API
- Editable site settings stored in the database
"""

__version__ = "0.1.0"
