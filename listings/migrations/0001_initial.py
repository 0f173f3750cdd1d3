import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import listings.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ListingApplication',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('reference_id', models.CharField(default=listings.models.generate_reference_id, editable=False, max_length=36, unique=True)),
                ('step', models.PositiveSmallIntegerField(default=1)),
                ('name', models.CharField(blank=True, max_length=255, null=True)),
                ('surname', models.CharField(blank=True, max_length=255, null=True)),
                ('email', models.EmailField(blank=True, max_length=254, null=True)),
                ('phone', models.CharField(blank=True, max_length=50, null=True)),
                ('type', models.PositiveSmallIntegerField(blank=True, choices=[(1, 'Room in shared property'), (2, 'Studio'), (3, 'Apartment'), (4, 'House')], null=True)),
                ('city', models.CharField(blank=True, max_length=255, null=True)),
                ('address', models.CharField(blank=True, max_length=500, null=True)),
                ('postcode', models.CharField(blank=True, max_length=50, null=True)),
                ('registration', models.BooleanField(blank=True, null=True)),
                ('available_from', models.DateField(blank=True, null=True)),
                ('available_to', models.DateField(blank=True, null=True)),
                ('size', models.CharField(blank=True, max_length=50, null=True)),
                ('rent', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('deposit', models.PositiveIntegerField(blank=True, null=True)),
                ('bills', models.JSONField(blank=True, null=True)),
                ('flatmates', models.JSONField(blank=True, null=True)),
                ('period', models.JSONField(blank=True, null=True)),
                ('description', models.JSONField(blank=True, null=True)),
                ('pets_allowed', models.BooleanField(blank=True, null=True)),
                ('smoking_allowed', models.BooleanField(blank=True, null=True)),
                ('furnished_type', models.PositiveSmallIntegerField(blank=True, choices=[(1, 'Fully furnished'), (2, 'Semi-furnished'), (3, 'None')], null=True)),
                ('shared_space', models.CharField(blank=True, max_length=500, null=True)),
                ('bathrooms', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('toilets', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('amenities', models.CharField(blank=True, max_length=500, null=True)),
                ('images', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='listing_applications', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Listing Application',
                'verbose_name_plural': 'Listing Applications',
                'db_table': 'listing_applications',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Property',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('approved', models.BooleanField(default=False)),
                ('status', models.PositiveSmallIntegerField(choices=[(1, 'Pending'), (2, 'Rent'), (3, 'Taken')], default=1)),
                ('slug', models.CharField(blank=True, max_length=120, null=True)),
                ('link', models.URLField(blank=True, max_length=500, null=True)),
                ('release_timestamp', models.DateTimeField(blank=True, null=True)),
                ('referral_code', models.CharField(blank=True, max_length=100, null=True)),
                ('interface', models.CharField(default='web', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='created_properties', to=settings.AUTH_USER_MODEL)),
                ('last_updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='updated_properties', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Property',
                'verbose_name_plural': 'Properties',
                'db_table': 'properties',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='PersonalData',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(blank=True, default='', max_length=255)),
                ('surname', models.CharField(blank=True, default='', max_length=255)),
                ('email', models.CharField(blank=True, default='', max_length=255)),
                ('phone', models.CharField(blank=True, default='', max_length=50)),
                ('property', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='personal_data', to='listings.property')),
            ],
            options={
                'verbose_name_plural': 'Personal Data',
                'db_table': 'personal_data',
            },
        ),
        migrations.CreateModel(
            name='PropertyData',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('city', models.CharField(blank=True, default='', max_length=255)),
                ('address', models.CharField(blank=True, default='', max_length=500)),
                ('postcode', models.CharField(blank=True, default='', max_length=50)),
                ('size', models.CharField(blank=True, default='', max_length=50)),
                ('rent', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('deposit', models.PositiveIntegerField(blank=True, null=True)),
                ('registration', models.BooleanField(default=False)),
                ('title', models.TextField(blank=True, default='')),
                ('period', models.TextField(blank=True, default='')),
                ('bills', models.TextField(blank=True, default='')),
                ('flatmates', models.TextField(blank=True, default='')),
                ('description', models.TextField(blank=True, default='')),
                ('images', models.TextField(blank=True, default='')),
                ('folder', models.CharField(blank=True, default='', max_length=100)),
                ('payment_link', models.URLField(blank=True, max_length=500, null=True)),
                ('pets_allowed', models.BooleanField(default=False)),
                ('smoking_allowed', models.BooleanField(default=False)),
                ('type', models.PositiveSmallIntegerField(blank=True, choices=[(1, 'Room in shared property'), (2, 'Studio'), (3, 'Apartment'), (4, 'House')], null=True)),
                ('furnished_type', models.PositiveSmallIntegerField(blank=True, choices=[(1, 'Fully furnished'), (2, 'Semi-furnished'), (3, 'None')], null=True)),
                ('shared_space', models.CharField(blank=True, max_length=500, null=True)),
                ('bathrooms', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('toilets', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('amenities', models.CharField(blank=True, max_length=500, null=True)),
                ('available_from', models.DateField(blank=True, null=True)),
                ('available_to', models.DateField(blank=True, null=True)),
                ('property', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='property_data', to='listings.property')),
            ],
            options={
                'verbose_name_plural': 'Property Data',
                'db_table': 'property_data',
            },
        ),
    ]
