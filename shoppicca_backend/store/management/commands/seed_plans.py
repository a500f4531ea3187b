from decimal import Decimal

from django.core.management.base import BaseCommand

from store.models import Plan

PLANS = [
    {
        "name": Plan.NAME_FREE,
        "price_cedis": Decimal("0.00"),
        "category_limit": 3,
        "products_per_category": 10,
        "can_customize_theme": False,
        "can_change_slug": False,
    },
    {
        "name": Plan.NAME_PAID,
        "price_cedis": Decimal("50.00"),
        "category_limit": None,
        "products_per_category": None,
        "can_customize_theme": True,
        "can_change_slug": True,
    },
]


class Command(BaseCommand):
    help = "Create or update the Free and Paid subscription plans"

    def add_arguments(self, parser):
        parser.add_argument(
            "--paid-price",
            type=Decimal,
            default=None,
            help="Monthly price of the paid plan in cedis",
        )

    def handle(self, *args, **options):
        paid_price = options.get("paid_price")

        for row in PLANS:
            defaults = dict(row)
            name = defaults.pop("name")
            if name == Plan.NAME_PAID and paid_price is not None:
                defaults["price_cedis"] = paid_price

            plan, created = Plan.objects.update_or_create(name=name, defaults=defaults)
            verb = "Created" if created else "Updated"
            self.stdout.write(self.style.SUCCESS(f"{verb} plan: {plan}"))
