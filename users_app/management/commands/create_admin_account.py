from django.core.management.base import BaseCommand, CommandError

from users_app.models import AdminAccount


class Command(BaseCommand):
    help = "Create (or reset the password of) a content admin account."

    def add_arguments(self, parser):
        parser.add_argument("email")
        parser.add_argument("password")

    def handle(self, *args, **options):
        email = options["email"].strip().lower()
        if not email:
            raise CommandError("Email must not be empty.")

        admin, created = AdminAccount.objects.get_or_create(email=email)
        admin.set_password(options["password"])
        admin.save(update_fields=["password"])

        verb = "Created" if created else "Updated"
        self.stdout.write(self.style.SUCCESS(f"{verb} admin account {email}"))
