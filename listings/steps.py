# listings/steps.py

from rest_framework import serializers

from .models import FINAL_STEP
from .payloads import normalize_payload_keys
from .serializers import STEP_SERIALIZERS


def next_step(step):
    """Step stored after ``step`` validates. Validating the last step stores FINAL_STEP + 1."""
    return step + 1


def validate_step(step, data, files=None, terms_required=False):
    """
    Validate ``data`` against the rules of ``step``.

    Keys are normalized first so camelCase and snake_case payloads are
    checked the same way. Raises a DRF ValidationError with the field map.
    """
    serializer_class = STEP_SERIALIZERS.get(step)
    if serializer_class is None:
        raise serializers.ValidationError({'step': f"Step must be between 1 and {FINAL_STEP}."})

    payload = normalize_payload_keys(data)
    if files:
        payload['new_images'] = list(files)

    serializer = serializer_class(data=payload, context={'terms_required': terms_required})
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data
