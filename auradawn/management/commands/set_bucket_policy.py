"""
Management command to make uploaded media publicly readable.
"""
from django.core.management.base import BaseCommand, CommandError

from auradawn import storage
from auradawn.conf import blog_settings
from auradawn.exceptions import StorageError


class Command(BaseCommand):
    help = "Apply a public-read policy to the media bucket"

    def handle(self, *args, **options):
        bucket_name = blog_settings.S3_BUCKET_NAME
        if not bucket_name:
            raise CommandError("S3_BUCKET_NAME is not configured")

        self.stdout.write(f"Setting public read policy for bucket: {bucket_name}...")
        try:
            storage.set_public_read_policy()
        except StorageError as e:
            raise CommandError(f"Error setting bucket policy: {e.__cause__ or e}") from e
        self.stdout.write(self.style.SUCCESS("Successfully set bucket policy to public read."))
