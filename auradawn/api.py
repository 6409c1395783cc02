"""
JSON API for django-auradawn.

Read endpoints are public where the public site exposes the same data;
everything that writes (and the media library listing) requires a staff
session. Errors are returned as ``{"error": message}``.
"""
import json
import logging

from django.db import transaction
from django.http import JsonResponse
from django.utils import timezone
from django.utils.dateparse import parse_datetime
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from .exceptions import StorageError
from .models import Asset, Category, Post, SiteConfig
from . import storage

logger = logging.getLogger(__name__)


class BadRequest(Exception):
    """Raised while reading a request body; becomes a 400 response."""


def is_staff(user):
    return user.is_authenticated and user.is_staff


def error(message, status):
    return JsonResponse({"error": message}, status=status)


def read_json(request):
    try:
        return json.loads(request.body or b"null")
    except (ValueError, UnicodeDecodeError):
        raise BadRequest("Invalid JSON body") from None


class JSONView(View):
    """
    Base view: staff check for ``staff_methods`` and 400 on BadRequest.
    """

    staff_methods = ()

    def dispatch(self, request, *args, **kwargs):
        if request.method.lower() in self.staff_methods and not is_staff(request.user):
            return error("Unauthorized", 401)
        try:
            return super().dispatch(request, *args, **kwargs)
        except BadRequest as e:
            return error(str(e), 400)


class PostCollectionView(JSONView):
    """GET all posts, POST to create or update one (matched by slug)."""

    staff_methods = ("post",)

    def get(self, request):
        posts = Post.objects.with_relations()
        limit = request.GET.get("limit")
        if limit:
            try:
                posts = posts[:max(int(limit), 0)]
            except ValueError:
                return error("limit must be an integer", 400)
        return JsonResponse([post.to_dict() for post in posts], safe=False)

    def post(self, request):
        data = read_json(request)
        if not isinstance(data, dict):
            return error("Expected a JSON object", 400)

        title = data.get("title")
        slug = data.get("slug")
        if not title or not slug:
            return error("Title and Slug are required", 400)

        category = None
        if data.get("categoryId"):
            category = Category.objects.filter(pk=data["categoryId"]).first()
            if category is None:
                return error("Category not found", 400)

        created_at = None
        if data.get("createdAt"):
            created_at = parse_datetime(str(data["createdAt"]))
            if created_at is None:
                return error("createdAt must be an ISO 8601 datetime", 400)
            if timezone.is_naive(created_at):
                created_at = timezone.make_aware(created_at)

        with transaction.atomic():
            post = Post.objects.filter(slug=slug).first()
            created = post is None
            if created:
                post = Post(slug=slug, author=request.user, published=bool(data.get("published")))
            elif data.get("published") is not None:
                post.published = bool(data["published"])

            post.title = title
            post.content = data.get("content") or ""
            post.excerpt = data.get("excerpt") or ""
            post.cover_image = data.get("coverImage") or ""
            post.category = category
            if created_at is not None:
                post.created_at = created_at
            post.save()
            post.set_tags(data.get("tags") or [])

        logger.info("%s post %s", "Created" if created else "Updated", post.slug)
        return JsonResponse(post.to_dict())


class PostResourceView(JSONView):
    """GET or DELETE one post by slug."""

    staff_methods = ("delete",)

    def get(self, request, slug):
        post = Post.objects.with_relations().filter(slug=slug).first()
        if post is None:
            return error("Post not found", 404)
        return JsonResponse(post.to_dict())

    def delete(self, request, slug):
        post = Post.objects.filter(slug=slug).first()
        if post is None:
            return error("Post not found", 404)
        post.delete()
        logger.info("Deleted post %s", slug)
        return JsonResponse({"success": True})


@method_decorator(csrf_exempt, name="dispatch")
class PostViewCountView(JSONView):
    """Count a page view; called by the post page after it loads."""

    def post(self, request, slug):
        post = Post.objects.filter(slug=slug).first()
        if post is None:
            return error("Post not found", 404)
        return JsonResponse({"viewCount": post.increment_view_count()})


class CategoryCollectionView(JSONView):

    staff_methods = ("post",)

    def get(self, request):
        return JsonResponse([category.to_dict() for category in Category.objects.all()], safe=False)

    def post(self, request):
        data = read_json(request)
        if not isinstance(data, dict) or not data.get("name") or not data.get("slug"):
            return error("Name and slug are required", 400)
        if Category.objects.filter(slug=data["slug"]).exists():
            return error("Category slug already exists", 400)
        category = Category.objects.create(name=data["name"], slug=data["slug"])
        return JsonResponse(category.to_dict())


class SiteSettingsView(JSONView):

    staff_methods = ("post",)

    def get(self, request):
        return JsonResponse(SiteConfig.get_settings())

    def post(self, request):
        data = read_json(request)
        if not isinstance(data, dict):
            return error("Expected a JSON object", 400)
        SiteConfig.save_settings(data)
        return JsonResponse({"success": True})


class AssetCollectionView(JSONView):
    """List the media library with usage, or delete assets."""

    staff_methods = ("get", "delete")

    def get(self, request):
        assets = Asset.objects.all().with_usage()
        return JsonResponse([asset.to_dict() for asset in assets], safe=False)

    def delete(self, request):
        data = read_json(request)
        items = data if isinstance(data, list) else [data]
        ids = [item.get("id") for item in items if isinstance(item, dict) and item.get("id")]
        if not ids:
            return error("No assets specified", 400)
        try:
            ids = [int(pk) for pk in ids]
        except (TypeError, ValueError):
            return error("Invalid asset id", 400)

        deleted = storage.delete_assets(Asset.objects.filter(pk__in=ids))
        return JsonResponse({"success": True, "deletedCount": deleted})


class UploadView(JSONView):
    """Upload one file (multipart field ``file``) to the media library."""

    staff_methods = ("post",)

    def post(self, request):
        uploaded = request.FILES.get("file")
        if uploaded is None:
            return error("No file uploaded", 400)
        try:
            asset = storage.upload_file(uploaded)
        except StorageError:
            logger.exception("Upload failed for %s", uploaded.name)
            return error("Upload failed", 500)
        return JsonResponse({"url": asset.url, "id": asset.pk})
