"""
Admin console views: authoring posts, the media library and site settings.

Every view requires a signed-in staff user. Anonymous visitors are sent to
LOGIN_URL; signed-in non-staff users get a 403.
"""
import logging
from urllib.parse import quote

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin, UserPassesTestMixin
from django.http import HttpResponse
from django.shortcuts import get_object_or_404, redirect
from django.urls import reverse, reverse_lazy
from django.utils.http import url_has_allowed_host_and_scheme
from django.views import View
from django.views.generic import CreateView, DeleteView, FormView, ListView, UpdateView

from . import storage
from .exceptions import StorageError
from .forms import AssetUploadForm, CategoryForm, PostForm, SiteSettingsForm
from .models import Asset, Category, Post, SiteConfig

logger = logging.getLogger(__name__)


class StaffRequiredMixin(LoginRequiredMixin, UserPassesTestMixin):

    def test_func(self):
        return self.request.user.is_staff


class DashboardView(StaffRequiredMixin, ListView):
    """All posts, drafts included."""

    model = Post
    template_name = "auradawn/console/dashboard.html"
    context_object_name = "posts"

    def get_queryset(self):
        return Post.objects.with_relations()


class PostEditorMixin(StaffRequiredMixin):
    model = Post
    form_class = PostForm
    template_name = "auradawn/console/post_form.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["category_form"] = CategoryForm()
        context["categories"] = Category.objects.all()
        return context

    def get_success_url(self):
        return reverse("auradawn:console_post_update", kwargs={"slug": self.object.slug})


class PostCreateView(PostEditorMixin, CreateView):

    def form_valid(self, form):
        form.instance.author = self.request.user
        response = super().form_valid(form)
        messages.success(self.request, f"Created “{self.object.title}”.")
        return response


class PostUpdateView(PostEditorMixin, UpdateView):
    slug_url_kwarg = "slug"

    def form_valid(self, form):
        response = super().form_valid(form)
        messages.success(self.request, f"Saved “{self.object.title}”.")
        return response


class PostDeleteView(StaffRequiredMixin, DeleteView):
    model = Post
    template_name = "auradawn/console/post_confirm_delete.html"
    success_url = reverse_lazy("auradawn:console_dashboard")

    def form_valid(self, form):
        title = self.object.title
        response = super().form_valid(form)
        messages.success(self.request, f"Deleted “{title}”.")
        return response


class PostExportView(StaffRequiredMixin, View):
    """Download a post as a Markdown file with YAML front matter."""

    def get(self, request, slug):
        post = get_object_or_404(Post, slug=slug)
        response = HttpResponse(post.to_markdown(), content_type="text/markdown; charset=utf-8")
        filename = f"{post.slug or 'untitled'}.md"
        response["Content-Disposition"] = f"attachment; filename*=UTF-8''{quote(filename)}"
        return response


class CategoryCreateView(StaffRequiredMixin, CreateView):
    """Create a category from the post editor, then return to it."""

    model = Category
    form_class = CategoryForm
    template_name = "auradawn/console/category_form.html"

    def get_success_url(self):
        next_url = self.request.POST.get("next", "")
        if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={self.request.get_host()}):
            return next_url
        return reverse("auradawn:console_post_create")

    def form_valid(self, form):
        response = super().form_valid(form)
        messages.success(self.request, f"Created category “{self.object.name}”.")
        return response


class AssetLibraryView(StaffRequiredMixin, FormView):
    """Media library: list with usage, upload new files."""

    form_class = AssetUploadForm
    template_name = "auradawn/console/assets.html"
    success_url = reverse_lazy("auradawn:console_assets")

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        assets = Asset.objects.all().with_usage()
        context["assets"] = assets
        context["unused_count"] = sum(1 for asset in assets if asset.is_unused)
        return context

    def form_valid(self, form):
        uploaded = form.cleaned_data["file"]
        try:
            asset = storage.upload_file(uploaded)
        except StorageError:
            logger.exception("Upload failed for %s", uploaded.name)
            messages.error(self.request, "Upload failed.")
            return redirect(self.success_url)
        messages.success(self.request, f"Uploaded {asset.filename}.")
        return super().form_valid(form)


class AssetDeleteView(StaffRequiredMixin, View):
    """
    Delete selected assets (``ids``), or every unused one (``unused=1``).
    """

    def post(self, request):
        if request.POST.get("unused"):
            assets = [asset for asset in Asset.objects.all().with_usage() if asset.is_unused]
        else:
            ids = [pk for pk in request.POST.getlist("ids") if pk.isdigit()]
            assets = Asset.objects.filter(pk__in=ids)

        deleted = storage.delete_assets(assets)
        if deleted:
            messages.success(request, f"Deleted {deleted} file(s).")
        else:
            messages.info(request, "Nothing to delete.")
        return redirect("auradawn:console_assets")


class SiteSettingsView(StaffRequiredMixin, FormView):
    form_class = SiteSettingsForm
    template_name = "auradawn/console/settings.html"
    success_url = reverse_lazy("auradawn:console_settings")

    def get_initial(self):
        return SiteConfig.get_settings()

    def form_valid(self, form):
        SiteConfig.save_settings(form.cleaned_data)
        messages.success(self.request, "Settings saved.")
        return super().form_valid(form)
