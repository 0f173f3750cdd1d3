# listings/serializers.py

from decimal import Decimal

from django.conf import settings
from rest_framework import serializers

from .locales import loads_localized
from .models import ListingApplication, Property
from .payloads import normalize_images, round_decimal

ALLOWED_MEDIA_TYPES = [
    'image/jpeg', 'image/jpg', 'image/png', 'image/gif', 'image/webp', 'image/heic', 'image/heif',
    'video/mp4', 'video/quicktime', 'video/x-msvideo', 'video/x-ms-wmv', 'video/x-flv',
    'video/x-matroska', 'video/webm',
]

TERMS_MUST_BE_ACCEPTED = 'account:authentication.errors.terms_must_be_accepted'
MAX_RENT = Decimal('99999999.99')


def _has_value(value):
    if value is None:
        return False
    if isinstance(value, (str, list, dict)) and not value:
        return False
    return True


class Step1Serializer(serializers.Serializer):
    """Reserved. Accepts any payload."""


class TermsSerializer(serializers.Serializer):
    contact = serializers.BooleanField(required=False)
    legals = serializers.BooleanField(required=False)


class Step2Serializer(serializers.Serializer):
    """Personal details. Terms are mandatory when ``terms_required`` is in the context."""

    name = serializers.CharField()
    surname = serializers.CharField()
    email = serializers.EmailField(error_messages={'invalid': 'account:authentication.errors.email_invalid'})
    phone = serializers.CharField(
        min_length=6,
        error_messages={'min_length': 'account:authentication.errors.phone_invalid'},
    )
    terms = TermsSerializer(required=False, allow_null=True)

    def validate(self, attrs):
        if not self.context.get('terms_required'):
            return attrs

        terms = attrs.get('terms')
        if not terms:
            raise serializers.ValidationError({'terms': 'This field is required.'})

        errors = {
            key: TERMS_MUST_BE_ACCEPTED
            for key in ('contact', 'legals')
            if terms.get(key) is not True
        }
        if errors:
            raise serializers.ValidationError({'terms': errors})
        return attrs


class Step3Serializer(serializers.Serializer):
    type = serializers.IntegerField()
    city = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    address = serializers.CharField()
    postcode = serializers.CharField()
    registration = serializers.BooleanField()
    available_from = serializers.DateField()
    available_to = serializers.DateField(required=False, allow_null=True)

    def validate(self, attrs):
        available_to = attrs.get('available_to')
        if available_to and available_to < attrs['available_from']:
            raise serializers.ValidationError({'available_to': 'Must be a date after or equal to available_from.'})
        return attrs


class Step4Serializer(serializers.Serializer):
    size = serializers.CharField()
    rent = serializers.DecimalField(max_digits=None, decimal_places=None, min_value=1, max_value=MAX_RENT)
    deposit = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    bills = serializers.JSONField()
    flatmates = serializers.JSONField(required=False, allow_null=True)
    description = serializers.JSONField()
    pets_allowed = serializers.BooleanField(required=False, allow_null=True)
    smoking_allowed = serializers.BooleanField(required=False, allow_null=True)
    furnished_type = serializers.IntegerField()
    shared_space = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    bathrooms = serializers.IntegerField(min_value=0)
    toilets = serializers.IntegerField(min_value=0)
    amenities = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_rent(self, value):
        return round_decimal(value)

    def validate_bills(self, value):
        if not _has_value(value):
            raise serializers.ValidationError('This field is required.')
        return value

    def validate_description(self, value):
        if not _has_value(value):
            raise serializers.ValidationError('This field is required.')
        return value


class Step5Serializer(serializers.Serializer):
    images = serializers.JSONField(required=False, allow_null=True)
    new_images = serializers.ListField(child=serializers.FileField(), required=False)

    def validate_new_images(self, files):
        max_bytes = settings.LISTING_IMAGE_MAX_BYTES
        for upload in files:
            content_type = getattr(upload, 'content_type', None)
            if content_type not in ALLOWED_MEDIA_TYPES:
                raise serializers.ValidationError(
                    f"Invalid file type for {upload.name}. Supported: images (JPEG, PNG, GIF, WebP, HEIC) and common video formats."
                )
            if upload.size > max_bytes:
                raise serializers.ValidationError(
                    f"File {upload.name} is too large. Maximum {max_bytes // (1024 * 1024)}MB allowed."
                )
        return files

    def validate(self, attrs):
        if not normalize_images(attrs.get('images')) and not attrs.get('new_images'):
            raise serializers.ValidationError({'images': 'Please add at least one image.'})
        return attrs


STEP_SERIALIZERS = {
    1: Step1Serializer,
    2: Step2Serializer,
    3: Step3Serializer,
    4: Step4Serializer,
    5: Step5Serializer,
}


class ListingApplicationSerializer(serializers.ModelSerializer):
    referenceId = serializers.CharField(source='reference_id', read_only=True)
    user_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = ListingApplication
        exclude = ['user']


class PropertySerializer(serializers.ModelSerializer):
    """Submitted property with its personal and listing data."""

    personal_data = serializers.SerializerMethodField()
    property_data = serializers.SerializerMethodField()

    class Meta:
        model = Property
        fields = [
            'id', 'created_by', 'last_updated_by', 'approved', 'status', 'slug', 'link',
            'release_timestamp', 'referral_code', 'interface', 'created_at', 'updated_at',
            'personal_data', 'property_data',
        ]

    def get_personal_data(self, obj):
        personal = getattr(obj, 'personal_data', None)
        if personal is None:
            return None
        return {
            'name': personal.name,
            'surname': personal.surname,
            'email': personal.email,
            'phone': personal.phone,
        }

    def get_property_data(self, obj):
        data = getattr(obj, 'property_data', None)
        if data is None:
            return None
        return {
            'city': data.city,
            'address': data.address,
            'postcode': data.postcode,
            'size': data.size,
            'rent': str(data.rent) if data.rent is not None else None,
            'deposit': data.deposit,
            'registration': data.registration,
            'title': loads_localized(data.title),
            'period': loads_localized(data.period),
            'bills': loads_localized(data.bills),
            'flatmates': loads_localized(data.flatmates),
            'description': loads_localized(data.description),
            'images': data.image_list(),
            'folder': data.folder,
            'payment_link': data.payment_link,
            'pets_allowed': data.pets_allowed,
            'smoking_allowed': data.smoking_allowed,
            'type': data.type,
            'furnished_type': data.furnished_type,
            'shared_space': data.shared_space,
            'bathrooms': data.bathrooms,
            'toilets': data.toilets,
            'amenities': data.amenities,
            'available_from': data.available_from,
            'available_to': data.available_to,
        }
