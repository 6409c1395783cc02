"""Sitemaps for the public site."""
from django.contrib.sitemaps import Sitemap
from django.urls import reverse

from .models import Post


class HomeSitemap(Sitemap):
    changefreq = "daily"
    priority = 1.0

    def items(self):
        return ["auradawn:home"]

    def location(self, item):
        return reverse(item)


class PostSitemap(Sitemap):
    changefreq = "weekly"
    priority = 0.7

    def items(self):
        return Post.objects.published()

    def lastmod(self, post):
        return post.updated_at


sitemaps = {
    "home": HomeSitemap,
    "posts": PostSitemap,
}
