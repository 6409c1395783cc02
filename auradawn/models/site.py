"""
Site-wide settings editable from the admin console.
"""
from django.db import models, transaction

from ..conf import blog_settings


class SiteConfig(models.Model):
    """A single key/value site setting (site_title, author_name, ...)."""

    key = models.CharField(max_length=100, unique=True)
    value = models.TextField(blank=True)

    class Meta:
        ordering = ["key"]
        verbose_name = "Site Setting"

    def __str__(self):
        return self.key

    @classmethod
    def get_settings(cls):
        """Return every known setting key, with "" for unset ones."""
        stored = dict(
            cls.objects.filter(key__in=blog_settings.SITE_SETTING_KEYS).values_list("key", "value")
        )
        return {key: stored.get(key, "") for key in blog_settings.SITE_SETTING_KEYS}

    @classmethod
    def save_settings(cls, values):
        """
        Upsert every known key from ``values``.

        Keys missing from ``values`` are stored as "". Unknown keys are
        ignored.
        """
        with transaction.atomic():
            for key in blog_settings.SITE_SETTING_KEYS:
                cls.objects.update_or_create(
                    key=key,
                    defaults={"value": values.get(key) or ""},
                )
        return cls.get_settings()
