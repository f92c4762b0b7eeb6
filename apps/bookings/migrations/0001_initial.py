import uuid
from decimal import Decimal

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('screens', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='ScreenBooking',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('campaign_id', models.UUIDField(db_index=True)),
                ('creative_id', models.UUIDField()),
                ('start_time', models.DateTimeField()),
                ('end_time', models.DateTimeField()),
                ('price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('currency', models.CharField(default='USD', max_length=3)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('confirmed', 'Confirmed'), ('cancelled', 'Cancelled'), ('completed', 'Completed')], default='pending', max_length=20)),
                ('payment_status', models.CharField(choices=[('pending', 'Pending'), ('paid', 'Paid'), ('refunded', 'Refunded')], default='pending', max_length=20)),
                ('payment_reference', models.CharField(blank=True, max_length=255)),
                ('cancellation_reason', models.CharField(blank=True, max_length=255)),
                ('confirmed_at', models.DateTimeField(blank=True, null=True)),
                ('cancelled_at', models.DateTimeField(blank=True, null=True)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField()),
                ('updated_at', models.DateTimeField()),
                ('screen', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='bookings', to='screens.screen')),
            ],
            options={
                'verbose_name': 'Screen booking',
                'verbose_name_plural': 'Screen bookings',
                'ordering': ['start_time'],
                'indexes': [
                    models.Index(fields=['screen', 'start_time', 'end_time'], name='booking_screen_period_idx'),
                    models.Index(fields=['status'], name='booking_status_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(end_time__gt=models.F('start_time')), name='screen_booking_valid_period'),
                    models.CheckConstraint(condition=models.Q(price__gte=0), name='screen_booking_non_negative_price'),
                ],
            },
        ),
    ]
