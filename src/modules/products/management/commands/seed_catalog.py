from __future__ import annotations

from django.core.management.base import BaseCommand

from modules.products.seeding import seed_sample_products


class Command(BaseCommand):
    help = "Insert the demonstration products when the catalog is empty."

    def handle(self, *args, **options):
        self.stdout.write("Seeding catalog...")
        created = seed_sample_products()
        if not created:
            self.stdout.write(
                self.style.WARNING("Catalog already has products; nothing seeded.")
            )
            return
        self.stdout.write(
            self.style.SUCCESS(f"Seed completed: products={len(created)}")
        )
