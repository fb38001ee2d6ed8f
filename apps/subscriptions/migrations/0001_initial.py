# Generated manually for subscriptions app

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Subscription',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('category', models.CharField(max_length=50)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=8, validators=[MinValueValidator(Decimal('0.01')), MaxValueValidator(Decimal('999999'))])),
                ('billing_cycle', models.CharField(choices=[('monthly', 'Monthly'), ('yearly', 'Yearly'), ('twoYear', '2 Years'), ('threeYear', '3 Years')], default='monthly', max_length=16)),
                ('frequency', models.CharField(choices=[('recurring', 'Recurring'), ('oneTime', 'One Time')], default='recurring', max_length=16)),
                ('next_due_date', models.DateField()),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='subscriptions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'subscriptions',
                'ordering': ['next_due_date', 'name'],
                'indexes': [
                    models.Index(fields=['user', 'next_due_date'], name='subs_user_due_idx'),
                    models.Index(fields=['user', 'category'], name='subs_user_category_idx'),
                    models.Index(fields=['billing_cycle'], name='subs_billing_cycle_idx'),
                ],
            },
        ),
    ]
