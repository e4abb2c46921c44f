import os
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.catalog.models import Product
from apps.users.models import User
from apps.users.roles import Role

PRODUCTS = [
    (
        "Sobao pasiego",
        Decimal("6.50"),
        "Bizcocho tradicional de los Valles Pasiegos hecho con mantequilla.",
        "https://images.vallestore.local/sobao.jpg",
    ),
    (
        "Quesada pasiega",
        Decimal("9.80"),
        "Tarta de queso fresco, huevo y limón, receta de la abuela.",
        "https://images.vallestore.local/quesada.jpg",
    ),
    (
        "Queso de nata de Cantabria",
        Decimal("12.00"),
        "Queso cremoso con denominación de origen.",
        "https://images.vallestore.local/queso-nata.jpg",
    ),
    (
        "Mantequilla artesana",
        Decimal("4.25"),
        "Mantequilla de leche de vaca pasiega, 250 g.",
        "https://images.vallestore.local/mantequilla.jpg",
    ),
    (
        "Miel de brezo",
        Decimal("7.90"),
        "Miel cruda de los montes del Pas, 500 g.",
        "",
    ),
]


class Command(BaseCommand):
    help = "Seed sample products and an admin account."

    def add_arguments(self, parser):
        parser.add_argument(
            "--force", action="store_true", help="Delete existing products before seeding"
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["force"]:
            self.stdout.write("Deleting existing products...")
            Product.objects.all().delete()

        if Product.objects.exists():
            self.stdout.write("Products already present; skipping (use --force to reseed).")
        else:
            self.stdout.write("Seeding products...")
            Product.objects.bulk_create(
                Product(name=name, price=price, description=desc, imagen=imagen)
                for name, price, desc, imagen in PRODUCTS
            )

        username = os.getenv("SEED_ADMIN_USERNAME", "admin")
        password = os.getenv("SEED_ADMIN_PASSWORD", "admin123")
        admin, created = User.objects.get_or_create(
            username=username, defaults={"role": Role.ADMIN}
        )
        if created:
            admin.set_password(password)
            admin.save()
            self.stdout.write(f"Created admin account '{username}'.")
        elif admin.role != Role.ADMIN:
            admin.role = Role.ADMIN
            admin.save(update_fields=["role"])
            self.stdout.write(f"Promoted '{username}' to admin.")

        self.stdout.write(self.style.SUCCESS("Store seed completed."))
