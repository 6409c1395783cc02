"""
Management command to seed a fresh database with an admin user,
categories and a few sample posts.

Existing rows are left untouched, so the command is safe to re-run.
"""
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from auradawn.models import Category, Post

ADMIN_EMAIL = "admin@example.com"

CATEGORIES = [
    ("Technology", "tech"),
    ("Life", "life"),
    ("Ideas", "ideas"),
]

POSTS = [
    {
        "title": "那些「酷，但用不着」的 self-hosted 应用",
        "slug": "cool-but-unnecessary-self-hosted-apps",
        "content": "Self-host 即「自部署」...",
        "published": True,
        "view_count": 209,
        "category": "tech",
    },
    {
        "title": "我眼中的 AdventureX 2025",
        "slug": "adventurex-2025",
        "content": "AdventureX 是一个...",
        "published": True,
        "view_count": 105,
        "category": "life",
    },
    {
        "title": "Weekly #34: 22 岁，我要成为什么样的人",
        "slug": "weekly-34",
        "content": "本周思考...",
        "published": False,
        "view_count": 0,
        "category": "life",
    },
]


class Command(BaseCommand):
    help = "Seed the blog with an admin user, categories and sample posts"

    @transaction.atomic
    def handle(self, *args, **options):
        User = get_user_model()
        admin = User.objects.filter(email=ADMIN_EMAIL).first()
        if admin is None:
            admin = User(username="admin", email=ADMIN_EMAIL, first_name="Admin", is_staff=True, is_superuser=True)
            # Log in only after `create_admin` sets a real password
            admin.set_unusable_password()
            admin.save()
            self.stdout.write(f"Created admin user {admin.email}")
        else:
            self.stdout.write("Admin user already exists")

        categories = {}
        for name, slug in CATEGORIES:
            categories[slug], _ = Category.objects.get_or_create(slug=slug, defaults={"name": name})
        self.stdout.write("Categories seeded")

        created = 0
        for data in POSTS:
            _, was_created = Post.objects.get_or_create(
                slug=data["slug"],
                defaults={
                    "title": data["title"],
                    "content": data["content"],
                    "published": data["published"],
                    "view_count": data["view_count"],
                    "author": admin,
                    "category": categories.get(data["category"]),
                },
            )
            created += was_created
        self.stdout.write(self.style.SUCCESS(f"Posts seeded ({created} new)"))
