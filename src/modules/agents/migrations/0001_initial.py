from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="DeliveryAgent",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("agent_code", models.CharField(blank=True, default="", max_length=50)),
                ("name", models.CharField(max_length=255)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("phone", models.CharField(blank=True, default="", max_length=20)),
                (
                    "status",
                    models.CharField(
                        choices=[("AVAILABLE", "Available"), ("BUSY", "Busy")],
                        default="AVAILABLE",
                        max_length=20,
                    ),
                ),
                ("total_deliveries", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "total_earnings",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True
                    ),
                ),
                (
                    "todays_earning",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True
                    ),
                ),
                (
                    "rating",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=3, null=True
                    ),
                ),
            ],
            options={
                "db_table": "delivery_agents",
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["status"], name="agents_status_idx")
                ],
            },
        ),
    ]
