"""
Management command to create an admin user or reset its password.
"""
from getpass import getpass

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError


class Command(BaseCommand):
    help = "Create a staff superuser, or reset the password of an existing one"

    def add_arguments(self, parser):
        parser.add_argument("--email", required=True, help="Admin email address")
        parser.add_argument(
            "--password",
            help="New password (prompted for when omitted)",
        )
        parser.add_argument(
            "--username",
            help="Username for a new user (defaults to the part of the email before @)",
        )

    def handle(self, *args, **options):
        email = options["email"].strip()
        password = options.get("password") or self._prompt_password()
        if not email or not password:
            raise CommandError("Email and password must not be empty")

        User = get_user_model()
        user = User.objects.filter(email__iexact=email).first()
        created = user is None
        if created:
            username = options.get("username") or email.split("@")[0]
            user = User(username=username, email=email)

        user.is_staff = True
        user.is_superuser = True
        user.is_active = True
        user.set_password(password)
        user.save()

        verb = "Created" if created else "Updated"
        self.stdout.write(self.style.SUCCESS(f"{verb} admin user {user.email}"))

    def _prompt_password(self):
        password = getpass("Password: ")
        if password != getpass("Password (again): "):
            raise CommandError("Passwords do not match")
        return password
