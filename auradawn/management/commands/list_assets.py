"""
Management command to print the most recent uploads.
"""
from django.core.management.base import BaseCommand

from auradawn.models import Asset


class Command(BaseCommand):
    help = "List the latest uploaded assets"

    def add_arguments(self, parser):
        parser.add_argument(
            "--limit",
            type=int,
            default=5,
            help="Number of assets to show (default: 5)",
        )

    def handle(self, *args, **options):
        limit = options["limit"]
        assets = Asset.objects.order_by("-created_at")[:limit]

        self.stdout.write(f"Latest {limit} assets:")
        for asset in assets:
            self.stdout.write(f"ID: {asset.pk}")
            self.stdout.write(f"Created At: {asset.created_at.isoformat()}")
            self.stdout.write(f"URL: {asset.url}")
            self.stdout.write(f"Key: {asset.key}")
            self.stdout.write("---")
