"""
Tests for django-auradawn models.
"""
from datetime import datetime, timezone as dt_timezone

import pytest
import yaml
from django.contrib.auth.models import AnonymousUser

from auradawn.models import Asset, Category, Post, SiteConfig, Tag
from auradawn.models.posts import tag_slug


@pytest.fixture
def asset(db):
    return Asset.objects.create(
        url="https://cdn.example.com/abc-cover.png",
        key="abc-cover.png",
        filename="cover.png",
        mime_type="image/png",
        size=2048,
        width=640,
        height=480,
    )


class TestCategory:
    """Tests for Category model."""

    def test_create_category(self, db):
        cat = Category.objects.create(name="My Category")
        assert cat.slug == "my-category"
        assert str(cat) == "My Category"

    def test_unicode_slug(self, db):
        cat = Category.objects.create(name="读书 笔记")
        assert cat.slug == "读书-笔记"

    def test_post_count(self, category, post, draft):
        draft.category = category
        draft.save()
        assert category.post_count == 1

    def test_to_dict(self, category):
        assert category.to_dict() == {"id": category.pk, "name": "Reading", "slug": "reading"}


class TestTag:
    """Tests for Tag model."""

    def test_tag_slug(self):
        assert tag_slug("  Deep   Work ") == "deep-work"

    def test_slug_on_save(self, db):
        tag = Tag.objects.create(name="Reading Notes")
        assert tag.slug == "reading-notes"

    def test_get_or_create_many(self, db):
        Tag.objects.create(name="Django")
        tags = Tag.objects.get_or_create_many(["django", "Python", "", "  ", "python"])
        assert [tag.name for tag in tags] == ["Django", "Python"]
        assert Tag.objects.count() == 2


class TestPost:
    """Tests for Post model."""

    def test_str(self, post):
        assert str(post) == "Test Post"

    def test_slug_generated_from_title(self, staff_user):
        post = Post.objects.create(title="Hello World", author=staff_user)
        assert post.slug == "hello-world"

    def test_slug_is_unique(self, staff_user):
        first = Post.objects.create(title="Same", author=staff_user)
        second = Post.objects.create(title="Same", author=staff_user)
        third = Post.objects.create(title="Same", author=staff_user)
        assert [first.slug, second.slug, third.slug] == ["same", "same-1", "same-2"]

    def test_unicode_slug(self, staff_user):
        post = Post.objects.create(title="我眼中的 AdventureX", author=staff_user)
        assert post.slug == "我眼中的-adventurex"

    def test_slug_fallback(self, staff_user):
        post = Post.objects.create(title="!!!", author=staff_user)
        assert post.slug == "post"

    def test_explicit_slug_kept(self, staff_user):
        post = Post.objects.create(title="Anything", slug="custom", author=staff_user)
        assert post.slug == "custom"

    def test_absolute_url(self, post):
        assert post.get_absolute_url() == "/posts/test-post/"

    def test_published_queryset(self, post, draft):
        assert list(Post.objects.published()) == [post]

    def test_ordering_newest_first(self, staff_user):
        old = Post.objects.create(
            title="Old", author=staff_user, created_at=datetime(2020, 1, 1, tzinfo=dt_timezone.utc)
        )
        new = Post.objects.create(title="New", author=staff_user)
        assert list(Post.objects.all()) == [new, old]

    def test_can_view(self, post, draft, user):
        assert post.can_view(AnonymousUser())
        assert not draft.can_view(AnonymousUser())
        assert not draft.can_view(None)
        assert draft.can_view(user)

    def test_increment_view_count(self, post):
        assert post.increment_view_count() == 1
        assert post.increment_view_count() == 2
        post.refresh_from_db()
        assert post.view_count == 2

    def test_set_tags(self, post):
        post.set_tags(["books", "Books", "notes"])
        assert sorted(post.tag_names) == ["books", "notes"]
        post.set_tags([])
        assert post.tag_names == []

    def test_render(self, post):
        rendered = post.render()
        assert "media-card--book" in rendered.html
        assert rendered.toc[0].name == "Notes"

    def test_render_cache_follows_edits(self, post):
        assert "Dune" in post.render().html
        post.content = "Something else"
        post.save()
        html = post.render().html
        assert "Dune" not in html
        assert "Something else" in html

    def test_to_markdown(self, post):
        post.set_tags(["books"])
        exported_at = datetime(2025, 1, 2, 3, 4, 5, tzinfo=dt_timezone.utc)

        text = post.to_markdown(exported_at=exported_at)

        assert text.startswith("---\n")
        _, header, body = text.split("---\n", 2)
        assert yaml.safe_load(header) == {
            "title": "Test Post",
            "slug": "test-post",
            "date": "2025-01-02T03:04:05+00:00",
            "published": True,
            "excerpt": "A test post",
            "tags": ["books"],
        }
        assert body == "\n" + post.content

    def test_to_markdown_omits_empty_fields(self, draft):
        header = draft.to_markdown().split("---\n")[1]
        front_matter = yaml.safe_load(header)
        assert "excerpt" not in front_matter
        assert "coverImage" not in front_matter
        assert "tags" not in front_matter

    def test_to_dict(self, post, staff_user, category):
        data = post.to_dict()
        assert data["slug"] == "test-post"
        assert data["coverImage"] is None
        assert data["viewCount"] == 0
        assert data["authorId"] == staff_user.pk
        assert data["author"] == {"id": staff_user.pk, "name": "Aura", "email": "author@example.com"}
        assert data["category"] == category.to_dict()
        assert data["tags"] == []


class TestAsset:
    """Tests for Asset model."""

    def test_properties(self, asset):
        assert str(asset) == "cover.png"
        assert asset.file_extension == ".png"
        assert asset.is_image
        assert asset.human_file_size == "2.0 KB"

    def test_unused_asset(self, asset, post):
        [result] = Asset.objects.all().with_usage()
        assert result.is_unused
        assert result.to_dict()["isUnused"] is True

    def test_used_as_cover(self, asset, post):
        post.cover_image = asset.url
        post.save()
        [result] = Asset.objects.all().with_usage()
        assert not result.is_unused

    def test_used_in_content(self, asset, post):
        post.content = f"![cover]({asset.url})"
        post.save()
        [result] = Asset.objects.all().with_usage()
        assert not result.is_unused

    def test_key_in_content(self, asset, post):
        post.content = f"see {asset.key}"
        post.save()
        [result] = Asset.objects.all().with_usage()
        assert not result.is_unused

    def test_used_in_site_settings(self, asset):
        SiteConfig.objects.create(key="site_title", value=asset.url)
        [result] = Asset.objects.all().with_usage()
        assert not result.is_unused

    def test_to_dict_without_usage(self, asset):
        data = asset.to_dict()
        assert data["mimeType"] == "image/png"
        assert "isUnused" not in data


class TestSiteConfig:
    """Tests for SiteConfig model."""

    def test_defaults_are_empty(self, db):
        assert SiteConfig.get_settings() == {
            "site_title": "",
            "site_description": "",
            "author_name": "",
            "author_email": "",
        }

    def test_save_settings(self, db):
        result = SiteConfig.save_settings({"site_title": "AuraDawn", "unknown": "x"})
        assert result["site_title"] == "AuraDawn"
        assert not SiteConfig.objects.filter(key="unknown").exists()

        SiteConfig.save_settings({"site_title": "Changed"})
        assert SiteConfig.objects.get(key="site_title").value == "Changed"
        assert SiteConfig.objects.filter(key="site_title").count() == 1
