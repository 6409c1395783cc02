"""
Public views for django-auradawn.
"""
from django.http import Http404
from django.shortcuts import get_object_or_404
from django.views.generic import DetailView, ListView

from .conf import blog_settings
from .models import Post


class HomeView(ListView):
    """Landing page with the latest published posts."""

    template_name = "auradawn/home.html"
    context_object_name = "posts"

    def get_queryset(self):
        return Post.objects.published()[:blog_settings.HOME_POST_COUNT]


class PostListView(ListView):
    """List published posts with pagination."""

    model = Post
    template_name = "auradawn/post_list.html"
    context_object_name = "posts"

    def get_paginate_by(self, queryset):
        return blog_settings.POSTS_PER_PAGE

    def get_queryset(self):
        return Post.objects.published().with_relations()


class PostDetailView(DetailView):
    """Display a single post; drafts are visible to signed-in users only."""

    model = Post
    template_name = "auradawn/post_detail.html"
    context_object_name = "post"

    def get_object(self, queryset=None):
        obj = get_object_or_404(Post.objects.with_relations(), slug=self.kwargs["slug"])

        if not obj.can_view(self.request.user):
            raise Http404("Post not found")

        return obj

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["rendered"] = self.object.render()
        return context
