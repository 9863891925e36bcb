import decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("orders", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="order",
            name="total",
            field=models.DecimalField(
                decimal_places=2,
                max_digits=20,
                validators=[
                    django.core.validators.MinValueValidator(decimal.Decimal("0.00"))
                ],
            ),
        ),
    ]
