import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("store", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="SubscriptionPayment",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("provider", models.CharField(choices=[("paystack", "Paystack")], default="paystack", max_length=32)),
                (
                    "reference",
                    models.CharField(
                        help_text="Provider reference (Paystack reference). Must be unique for idempotency.",
                        max_length=128,
                        unique=True,
                    ),
                ),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.01"))],
                    ),
                ),
                ("currency", models.CharField(default="GHS", max_length=8)),
                (
                    "status",
                    models.CharField(
                        choices=[("initiated", "Initiated"), ("verified", "Verified"), ("failed", "Failed")],
                        default="initiated",
                        max_length=32,
                    ),
                ),
                ("authorization_url", models.URLField(blank=True, default="", max_length=500)),
                ("onboarding", models.JSONField(blank=True, default=dict)),
                ("provider_payload", models.JSONField(blank=True, default=dict)),
                ("initiated_at", models.DateTimeField(auto_now_add=True)),
                ("verified_at", models.DateTimeField(blank=True, null=True)),
                (
                    "plan",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to="store.plan",
                    ),
                ),
                (
                    "store",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="payments",
                        to="store.store",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="subscription_payments",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-initiated_at"],
                "indexes": [
                    models.Index(fields=["status"], name="subpay_status_idx"),
                    models.Index(fields=["user", "initiated_at"], name="subpay_user_initiated_idx"),
                ],
            },
        ),
    ]
