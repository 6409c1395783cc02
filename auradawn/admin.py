"""
Django admin configuration for auradawn.
"""
from django.contrib import admin
from django.utils.html import format_html

from . import storage
from .models import Asset, Category, Post, SiteConfig, Tag


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["name", "slug", "post_count", "created_at"]
    search_fields = ["name", "slug"]
    prepopulated_fields = {"slug": ("name",)}


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    list_display = ["name", "slug", "created_at"]
    search_fields = ["name", "slug"]
    readonly_fields = ["created_at"]


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = [
        "title_preview",
        "author",
        "published",
        "category",
        "view_count",
        "created_at",
    ]
    list_filter = ["published", "category", "created_at"]
    search_fields = ["title", "content", "author__username"]
    raw_id_fields = ["author", "category"]
    filter_horizontal = ["tags"]
    date_hierarchy = "created_at"
    readonly_fields = ["view_count", "updated_at"]
    prepopulated_fields = {"slug": ("title",)}

    fieldsets = (
        (None, {
            "fields": ("title", "slug", "content", "excerpt", "author")
        }),
        ("Taxonomy", {
            "fields": ("category", "tags")
        }),
        ("Publishing", {
            "fields": ("published", "cover_image", "created_at")
        }),
        ("Metadata", {
            "fields": ("view_count", "updated_at"),
            "classes": ("collapse",),
        }),
    )

    actions = ["publish_posts", "unpublish_posts"]

    def title_preview(self, obj):
        """Truncated title for list display."""
        return obj.title[:60] + "..." if len(obj.title) > 60 else obj.title

    title_preview.short_description = "Title"

    @admin.action(description="Publish selected posts")
    def publish_posts(self, request, queryset):
        count = queryset.update(published=True)
        self.message_user(request, f"{count} posts published.")

    @admin.action(description="Unpublish selected posts")
    def unpublish_posts(self, request, queryset):
        count = queryset.update(published=False)
        self.message_user(request, f"{count} posts unpublished.")


@admin.register(Asset)
class AssetAdmin(admin.ModelAdmin):
    list_display = [
        "thumbnail_preview",
        "filename",
        "mime_type",
        "human_file_size",
        "dimensions",
        "created_at",
    ]
    list_filter = ["mime_type", "created_at"]
    search_fields = ["filename", "key", "url"]
    readonly_fields = ["url", "key", "mime_type", "size", "width", "height", "created_at"]
    actions = ["delete_from_storage"]

    def thumbnail_preview(self, obj):
        if obj.is_image:
            return format_html(
                '<img src="{}" style="max-width: 50px; max-height: 50px;" />',
                obj.url,
            )
        return obj.file_extension or "-"

    thumbnail_preview.short_description = "Preview"

    def dimensions(self, obj):
        if obj.width and obj.height:
            return f"{obj.width}x{obj.height}"
        return "-"

    dimensions.short_description = "Size"

    @admin.action(description="Delete selected files from storage")
    def delete_from_storage(self, request, queryset):
        count = storage.delete_assets(queryset)
        self.message_user(request, f"{count} files deleted.")


@admin.register(SiteConfig)
class SiteConfigAdmin(admin.ModelAdmin):
    list_display = ["key", "value"]
    search_fields = ["key", "value"]
