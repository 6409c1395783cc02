"""
Media library model for django-auradawn.

Files live in an S3-compatible bucket; an Asset row records where.
Uploading and deleting go through ``auradawn.storage``.
"""
import os

from django.db import models


class AssetQuerySet(models.QuerySet):

    def with_usage(self):
        """
        Return the assets as a list, each with an ``is_unused`` attribute.

        An asset is in use when its URL is a post's cover image or a site
        setting value, or when its URL or object key appears in any post
        body.
        """
        from .posts import Post
        from .site import SiteConfig

        exact_matches = set()
        bodies = []
        for content, cover_image in Post.objects.values_list("content", "cover_image"):
            if cover_image:
                exact_matches.add(cover_image)
            bodies.append(content or "")
        exact_matches.update(SiteConfig.objects.values_list("value", flat=True))
        all_content = " ".join(bodies)

        assets = list(self)
        for asset in assets:
            used = (
                asset.url in exact_matches
                or asset.url in all_content
                or asset.key in all_content
            )
            asset.is_unused = not used
        return assets


class Asset(models.Model):
    """An uploaded file stored in the object store."""

    url = models.URLField(max_length=500)
    key = models.CharField(
        max_length=500,
        unique=True,
        help_text="Object key in the bucket",
    )
    filename = models.CharField(max_length=255, help_text="Original filename")
    mime_type = models.CharField(max_length=100, blank=True)
    size = models.PositiveIntegerField(default=0, help_text="File size in bytes")
    width = models.PositiveIntegerField(null=True, blank=True)
    height = models.PositiveIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = AssetQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.filename

    @property
    def file_extension(self):
        return os.path.splitext(self.filename)[1].lower()

    @property
    def is_image(self):
        return self.mime_type.startswith("image/")

    @property
    def human_file_size(self):
        """Return human-readable file size."""
        size = self.size
        for unit in ["B", "KB", "MB", "GB"]:
            if size < 1024:
                return f"{size:.1f} {unit}"
            size /= 1024
        return f"{size:.1f} TB"

    def to_dict(self):
        data = {
            "id": self.pk,
            "url": self.url,
            "key": self.key,
            "filename": self.filename,
            "mimeType": self.mime_type,
            "size": self.size,
            "width": self.width,
            "height": self.height,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
        if hasattr(self, "is_unused"):
            data["isUnused"] = self.is_unused
        return data
