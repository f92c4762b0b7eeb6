import uuid
from decimal import Decimal

from django.db import migrations, models
import django.db.models.deletion

import apps.screens.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Screen',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('owner_id', models.UUIDField(db_index=True)),
                ('name', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True)),
                ('screen_type', models.CharField(blank=True, help_text='Digital, LED, Billboard, ...', max_length=50)),
                ('city', models.CharField(blank=True, max_length=120)),
                ('is_active', models.BooleanField(default=True)),
                ('is_verified', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Screen',
                'verbose_name_plural': 'Screens',
                'ordering': ['name'],
                'indexes': [
                    models.Index(fields=['is_active', 'is_verified'], name='screen_active_verified_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ScreenAvailability',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('day_of_week', models.PositiveSmallIntegerField(choices=[(0, 'Monday'), (1, 'Tuesday'), (2, 'Wednesday'), (3, 'Thursday'), (4, 'Friday'), (5, 'Saturday'), (6, 'Sunday')])),
                ('start_time', models.TimeField()),
                ('end_time', models.TimeField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('screen', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='availability_windows', to='screens.screen')),
            ],
            options={
                'verbose_name': 'Screen availability window',
                'verbose_name_plural': 'Screen availability windows',
                'ordering': ['day_of_week', 'start_time'],
                'indexes': [
                    models.Index(fields=['screen', 'day_of_week'], name='screen_avail_day_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(end_time__gt=models.F('start_time')), name='screen_availability_valid_times'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ScreenPricing',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('hourly_rate', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('daily_rate', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('weekly_rate', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('monthly_rate', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('currency', models.CharField(default=apps.screens.models._default_currency, max_length=3)),
                ('minimum_booking_fee', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Floor applied to bookings shorter than one day.', max_digits=10)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('screen', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='pricing', to='screens.screen')),
            ],
            options={
                'verbose_name': 'Screen pricing',
                'verbose_name_plural': 'Screen pricing',
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(
                            ('hourly_rate__gte', 0),
                            ('daily_rate__gte', 0),
                            ('weekly_rate__gte', 0),
                            ('monthly_rate__gte', 0),
                            ('minimum_booking_fee__gte', 0),
                        ),
                        name='screen_pricing_non_negative',
                    ),
                ],
            },
        ),
    ]
