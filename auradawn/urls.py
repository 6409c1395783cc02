"""
URL configuration for django-auradawn.

Include in your project urls.py:

    path('', include('auradawn.urls')),

Console pages require a staff login; make sure LOGIN_URL points at a
login view (for example django.contrib.auth.urls).
"""
from django.contrib.sitemaps.views import sitemap
from django.urls import path

from . import api, console, views
from .sitemaps import sitemaps

app_name = "auradawn"

urlpatterns = [
    # Public site
    path("", views.HomeView.as_view(), name="home"),
    path("posts/", views.PostListView.as_view(), name="post_list"),
    path("posts/<str:slug>/", views.PostDetailView.as_view(), name="post_detail"),
    path("sitemap.xml", sitemap, {"sitemaps": sitemaps}, name="sitemap"),

    # JSON API
    path("api/posts/", api.PostCollectionView.as_view(), name="api_posts"),
    path("api/posts/<str:slug>/", api.PostResourceView.as_view(), name="api_post"),
    path("api/posts/<str:slug>/view/", api.PostViewCountView.as_view(), name="api_post_view"),
    path("api/categories/", api.CategoryCollectionView.as_view(), name="api_categories"),
    path("api/settings/", api.SiteSettingsView.as_view(), name="api_settings"),
    path("api/assets/", api.AssetCollectionView.as_view(), name="api_assets"),
    path("api/upload/", api.UploadView.as_view(), name="api_upload"),

    # Admin console
    path("console/", console.DashboardView.as_view(), name="console_dashboard"),
    path("console/posts/new/", console.PostCreateView.as_view(), name="console_post_create"),
    path("console/posts/<str:slug>/edit/", console.PostUpdateView.as_view(), name="console_post_update"),
    path("console/posts/<str:slug>/delete/", console.PostDeleteView.as_view(), name="console_post_delete"),
    path("console/posts/<str:slug>/export/", console.PostExportView.as_view(), name="console_post_export"),
    path("console/categories/new/", console.CategoryCreateView.as_view(), name="console_category_create"),
    path("console/assets/", console.AssetLibraryView.as_view(), name="console_assets"),
    path("console/assets/delete/", console.AssetDeleteView.as_view(), name="console_asset_delete"),
    path("console/settings/", console.SiteSettingsView.as_view(), name="console_settings"),
]
