from django.db import migrations, models

import donation.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='BloodRequest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('requester_id', models.CharField(db_index=True, max_length=64)),
                ('name', models.CharField(blank=True, max_length=255)),
                ('phone', models.CharField(blank=True, max_length=32)),
                ('user_role', models.CharField(blank=True, max_length=10)),
                ('pin_code', models.CharField(blank=True, db_index=True, max_length=12)),
                ('blood_type_needed', models.CharField(blank=True, max_length=5)),
                ('status', models.CharField(choices=[('PENDING', 'Pending'), ('APPROVED', 'Approved'), ('DENIED', 'Denied')], db_index=True, default='PENDING', max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['-created_at', '-id'],
                'indexes': [models.Index(fields=['requester_id', 'status'], name='request_requester_status_idx')],
            },
        ),
        migrations.CreateModel(
            name='User',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('user_id', models.CharField(default=donation.models.generate_user_id, max_length=64, unique=True)),
                ('phone', models.CharField(db_index=True, max_length=32)),
                ('name', models.CharField(blank=True, max_length=255)),
                ('gender', models.CharField(blank=True, max_length=20)),
                ('address', models.TextField(blank=True)),
                ('age', models.PositiveIntegerField(blank=True, null=True)),
                ('weight', models.FloatField(blank=True, null=True)),
                ('user_role', models.CharField(choices=[('Donor', 'Donor'), ('Hospital', 'Hospital')], db_index=True, max_length=10)),
                ('blood_type', models.CharField(blank=True, db_index=True, max_length=5)),
                ('pin_code', models.CharField(blank=True, db_index=True, max_length=12)),
                ('status', models.CharField(choices=[('PENDING_VERIFICATION', 'Pending verification'), ('VERIFIED', 'Verified'), ('DENIED', 'Denied')], db_index=True, default='PENDING_VERIFICATION', max_length=24)),
                ('is_request_active', models.BooleanField(default=False)),
                ('blood_type_needed', models.CharField(blank=True, max_length=5, null=True)),
                ('request_pin_code', models.CharField(blank=True, max_length=12, null=True)),
                ('last_donation_time', models.BigIntegerField(blank=True, null=True)),
                ('blood_report_link', models.CharField(blank=True, max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['created_at', 'id'],
            },
        ),
    ]
