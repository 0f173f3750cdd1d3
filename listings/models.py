# listings/models.py

import uuid

from django.conf import settings
from django.db import models

# Property status
STATUS_PENDING = 1
STATUS_RENT = 2
STATUS_TAKEN = 3

PROPERTY_STATUS_CHOICES = [
    (STATUS_PENDING, 'Pending'),
    (STATUS_RENT, 'Rent'),
    (STATUS_TAKEN, 'Taken'),
]

# Property type
PROPERTY_TYPE_CHOICES = [
    (1, 'Room in shared property'),
    (2, 'Studio'),
    (3, 'Apartment'),
    (4, 'House'),
]

FURNISHED_TYPE_CHOICES = [
    (1, 'Fully furnished'),
    (2, 'Semi-furnished'),
    (3, 'None'),
]

# Steps are 1-5; a draft whose last validated step was 5 sits at 6
FINAL_STEP = 5
READY_STEP = FINAL_STEP + 1


def generate_reference_id():
    return str(uuid.uuid4())


class ListingApplication(models.Model):
    """Draft of a listing, filled in over five steps and converted on submit."""

    reference_id = models.CharField(max_length=36, unique=True, editable=False, default=generate_reference_id)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='listing_applications',
    )
    step = models.PositiveSmallIntegerField(default=1)

    # Step 2: Personal details
    name = models.CharField(max_length=255, blank=True, null=True)
    surname = models.CharField(max_length=255, blank=True, null=True)
    email = models.EmailField(blank=True, null=True)
    phone = models.CharField(max_length=50, blank=True, null=True)

    # Step 3: Location & availability
    type = models.PositiveSmallIntegerField(choices=PROPERTY_TYPE_CHOICES, blank=True, null=True)
    city = models.CharField(max_length=255, blank=True, null=True)
    address = models.CharField(max_length=500, blank=True, null=True)
    postcode = models.CharField(max_length=50, blank=True, null=True)
    registration = models.BooleanField(blank=True, null=True)
    available_from = models.DateField(blank=True, null=True)
    available_to = models.DateField(blank=True, null=True)

    # Step 4: Property details. Text fields may be plain or locale-keyed.
    size = models.CharField(max_length=50, blank=True, null=True)
    rent = models.DecimalField(max_digits=12, decimal_places=2, blank=True, null=True)
    deposit = models.PositiveIntegerField(blank=True, null=True)
    bills = models.JSONField(blank=True, null=True)
    flatmates = models.JSONField(blank=True, null=True)
    period = models.JSONField(blank=True, null=True)
    description = models.JSONField(blank=True, null=True)
    pets_allowed = models.BooleanField(blank=True, null=True)
    smoking_allowed = models.BooleanField(blank=True, null=True)
    furnished_type = models.PositiveSmallIntegerField(choices=FURNISHED_TYPE_CHOICES, blank=True, null=True)
    shared_space = models.CharField(max_length=500, blank=True, null=True)
    bathrooms = models.PositiveSmallIntegerField(blank=True, null=True)
    toilets = models.PositiveSmallIntegerField(blank=True, null=True)
    amenities = models.CharField(max_length=500, blank=True, null=True)

    # Step 5: Media, comma-delimited URLs, first is the main image
    images = models.TextField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def image_list(self):
        return [url.strip() for url in (self.images or '').split(',') if url.strip()]

    def __str__(self):
        return f"Listing application {self.reference_id} (step {self.step})"

    class Meta:
        db_table = 'listing_applications'
        ordering = ['-created_at']
        verbose_name = "Listing Application"
        verbose_name_plural = "Listing Applications"


class Property(models.Model):
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='created_properties',
    )
    last_updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='updated_properties',
    )
    approved = models.BooleanField(default=False)
    status = models.PositiveSmallIntegerField(choices=PROPERTY_STATUS_CHOICES, default=STATUS_PENDING)
    slug = models.CharField(max_length=120, blank=True, null=True)
    link = models.URLField(max_length=500, blank=True, null=True)
    release_timestamp = models.DateTimeField(blank=True, null=True)
    referral_code = models.CharField(max_length=100, blank=True, null=True)
    interface = models.CharField(max_length=20, default='web')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Property #{self.pk} [{self.get_status_display()}]"

    class Meta:
        db_table = 'properties'
        ordering = ['-created_at']
        verbose_name = "Property"
        verbose_name_plural = "Properties"


class PersonalData(models.Model):
    property = models.OneToOneField(Property, on_delete=models.CASCADE, related_name='personal_data')
    name = models.CharField(max_length=255, blank=True, default='')
    surname = models.CharField(max_length=255, blank=True, default='')
    email = models.CharField(max_length=255, blank=True, default='')
    phone = models.CharField(max_length=50, blank=True, default='')

    def __str__(self):
        return f"{self.name} {self.surname}".strip() or self.email

    class Meta:
        db_table = 'personal_data'
        verbose_name_plural = "Personal Data"


class PropertyData(models.Model):
    """Listing content. title/period/bills/flatmates/description hold JSON locale maps."""

    property = models.OneToOneField(Property, on_delete=models.CASCADE, related_name='property_data')
    city = models.CharField(max_length=255, blank=True, default='')
    address = models.CharField(max_length=500, blank=True, default='')
    postcode = models.CharField(max_length=50, blank=True, default='')
    size = models.CharField(max_length=50, blank=True, default='')
    rent = models.DecimalField(max_digits=12, decimal_places=2, blank=True, null=True)
    deposit = models.PositiveIntegerField(blank=True, null=True)
    registration = models.BooleanField(default=False)

    title = models.TextField(blank=True, default='')
    period = models.TextField(blank=True, default='')
    bills = models.TextField(blank=True, default='')
    flatmates = models.TextField(blank=True, default='')
    description = models.TextField(blank=True, default='')

    images = models.TextField(blank=True, default='')
    folder = models.CharField(max_length=100, blank=True, default='')
    payment_link = models.URLField(max_length=500, blank=True, null=True)

    pets_allowed = models.BooleanField(default=False)
    smoking_allowed = models.BooleanField(default=False)
    type = models.PositiveSmallIntegerField(choices=PROPERTY_TYPE_CHOICES, blank=True, null=True)
    furnished_type = models.PositiveSmallIntegerField(choices=FURNISHED_TYPE_CHOICES, blank=True, null=True)
    shared_space = models.CharField(max_length=500, blank=True, null=True)
    bathrooms = models.PositiveSmallIntegerField(blank=True, null=True)
    toilets = models.PositiveSmallIntegerField(blank=True, null=True)
    amenities = models.CharField(max_length=500, blank=True, null=True)
    available_from = models.DateField(blank=True, null=True)
    available_to = models.DateField(blank=True, null=True)

    def image_list(self):
        return [url.strip() for url in (self.images or '').split(',') if url.strip()]

    def __str__(self):
        return f"Data for property #{self.property_id}"

    class Meta:
        db_table = 'property_data'
        verbose_name_plural = "Property Data"
