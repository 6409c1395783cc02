"""
Post, Category, and Tag models for django-auradawn.
"""
import re

import yaml
from django.conf import settings
from django.core.cache import cache
from django.db import models
from django.urls import reverse
from django.utils import timezone
from django.utils.text import slugify

from ..conf import blog_settings
from ..markdown import render_markdown


def tag_slug(name):
    """Slug for a tag name: lowercase, whitespace runs become hyphens."""
    return re.sub(r"\s+", "-", name.strip().lower())


class Category(models.Model):
    """Category for organizing posts."""

    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=100, unique=True, allow_unicode=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "Categories"

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name, allow_unicode=True)[:100]
        super().save(*args, **kwargs)

    @property
    def post_count(self):
        """Return count of published posts in this category."""
        return self.posts.filter(published=True).count()

    def to_dict(self):
        return {"id": self.pk, "name": self.name, "slug": self.slug}


class TagManager(models.Manager):

    def get_or_create_many(self, names):
        """
        Return Tag objects for ``names``, creating missing ones.

        Blank names are skipped. Names with the same slug ("Deep Work",
        "deep work") resolve to the same tag.
        """
        tags = []
        seen = set()
        for name in names:
            name = (name or "").strip()
            slug = tag_slug(name)
            if not slug or slug in seen:
                continue
            seen.add(slug)
            tag, _ = self.get_or_create(slug=slug, defaults={"name": name})
            tags.append(tag)
        return tags


class Tag(models.Model):
    """
    Flat tag for posts.

    Tags are created on demand when a post is saved with a new tag name.
    """

    name = models.CharField(max_length=100, unique=True)
    slug = models.CharField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = TagManager()

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = tag_slug(self.name)
        super().save(*args, **kwargs)

    def to_dict(self):
        return {"id": self.pk, "name": self.name, "slug": self.slug}


class PostQuerySet(models.QuerySet):

    def published(self):
        return self.filter(published=True)

    def with_relations(self):
        return self.select_related("author", "category").prefetch_related("tags")


class Post(models.Model):
    """
    Blog post written in Markdown.

    The body may contain media cards (``> [!BOOK] Title``) which render as
    book/film/music widgets, see ``auradawn.markdown.media_card``.
    """

    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True, blank=True, allow_unicode=True)
    content = models.TextField(blank=True)
    excerpt = models.TextField(blank=True)
    cover_image = models.URLField(max_length=500, blank=True)
    published = models.BooleanField(default=False, db_index=True)
    view_count = models.PositiveIntegerField(default=0)

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blog_posts",
    )
    category = models.ForeignKey(
        Category,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="posts",
    )
    tags = models.ManyToManyField(Tag, related_name="posts", blank=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PostQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["published", "-created_at"]),
        ]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        # Auto-generate a unique slug from the title
        if not self.slug:
            base_slug = slugify(self.title, allow_unicode=True)[:blog_settings.SLUG_MAX_LENGTH] or "post"
            slug = base_slug
            counter = 1
            while Post.objects.filter(slug=slug).exclude(pk=self.pk).exists():
                slug = f"{base_slug}-{counter}"
                counter += 1
            self.slug = slug

        super().save(*args, **kwargs)

    def get_absolute_url(self):
        return reverse("auradawn:post_detail", kwargs={"slug": self.slug})

    def can_view(self, user):
        """Published posts are public; drafts need a signed-in user."""
        if self.published:
            return True
        return user is not None and user.is_authenticated

    def increment_view_count(self):
        """Increment view count atomically and return the new value."""
        Post.objects.filter(pk=self.pk).update(view_count=models.F("view_count") + 1)
        self.view_count = Post.objects.values_list("view_count", flat=True).get(pk=self.pk)
        return self.view_count

    def set_tags(self, names):
        """Replace the post's tags with ``names``, creating tags as needed."""
        self.tags.set(Tag.objects.get_or_create_many(names))

    @property
    def tag_names(self):
        return [tag.name for tag in self.tags.all()]

    def render(self):
        """
        Render the Markdown body.

        Results are cached per post revision, so an edit invalidates the
        cached copy.
        """
        if self.pk is None or self.updated_at is None:
            return render_markdown(self.content)
        key = f"auradawn:post:{self.pk}:{self.updated_at.timestamp()}"
        return cache.get_or_set(
            key,
            lambda: render_markdown(self.content),
            blog_settings.RENDER_CACHE_TIMEOUT,
        )

    def to_markdown(self, exported_at=None):
        """
        Export the post as Markdown with a YAML front matter block.
        """
        exported_at = exported_at or timezone.now()
        front_matter = {
            "title": self.title,
            "slug": self.slug,
            "date": exported_at.isoformat(),
            "published": self.published,
        }
        if self.excerpt:
            front_matter["excerpt"] = self.excerpt
        if self.cover_image:
            front_matter["coverImage"] = self.cover_image
        if self.pk is not None:
            tags = self.tag_names
            if tags:
                front_matter["tags"] = tags

        header = yaml.safe_dump(front_matter, allow_unicode=True, sort_keys=False)
        return f"---\n{header}---\n\n{self.content}"

    def to_dict(self):
        """Serialize for the JSON API."""
        author = self.author
        return {
            "id": self.pk,
            "title": self.title,
            "slug": self.slug,
            "content": self.content,
            "excerpt": self.excerpt or None,
            "coverImage": self.cover_image or None,
            "published": self.published,
            "viewCount": self.view_count,
            "authorId": self.author_id,
            "categoryId": self.category_id,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
            "author": {
                "id": author.pk,
                "name": author.get_full_name() or author.get_username(),
                "email": author.email,
            },
            "category": self.category.to_dict() if self.category else None,
            "tags": [tag.to_dict() for tag in self.tags.all()],
        }
