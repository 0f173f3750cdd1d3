# listings/views.py

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAdminUser, IsAuthenticated

from core.responses import send_success

from .domains import request_origin, requires_terms
from .payloads import reference_id_from, to_plain_dict
from .serializers import ListingApplicationSerializer, PropertySerializer
from .services import delete_draft, edit_draft, list_drafts, save_draft, show_draft
from .steps import next_step, validate_step
from .submission import submit_listing_application

logger = logging.getLogger(__name__)


def _caller(request):
    user = request.user
    return user if user.is_authenticated else None


def _uploads(request):
    return request.FILES.getlist('new_images') if request.FILES else []


def _draft_response(draft, status_code=status.HTTP_200_OK):
    return send_success(ListingApplicationSerializer(draft).data, status_code=status_code)


def _page_response(page):
    return send_success({
        'data': ListingApplicationSerializer(page['items'], many=True).data,
        'current_page': page['current_page'],
        'last_page': page['last_page'],
        'per_page': page['per_page'],
        'total': page['total'],
    })


@api_view(['POST'])
@permission_classes([AllowAny])
def validate_step_view(request, step):
    """Validate one step and store the draft at the following step."""
    data = to_plain_dict(request.data)
    files = _uploads(request)
    terms_required = requires_terms(request_origin(request), settings.TERMS_REQUIRED_DOMAINS)

    validate_step(step, data, files, terms_required=terms_required)
    draft = save_draft(data, files, user=_caller(request), step_override=next_step(step))
    return _draft_response(draft)


@api_view(['POST'])
@permission_classes([AllowAny])
def save_listing_application(request):
    """Create or update a draft without step validation."""
    data = to_plain_dict(request.data)
    draft = save_draft(data, _uploads(request), user=_caller(request))
    return _draft_response(draft)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def submit_listing_application_view(request):
    reference_id = reference_id_from(to_plain_dict(request.data))
    property_obj = submit_listing_application(reference_id, request.user)
    return send_success(PropertySerializer(property_obj).data, status_code=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def list_listing_applications(request):
    return _page_response(list_drafts(request.query_params, user=request.user, scoped=True))


@api_view(['GET'])
@permission_classes([IsAdminUser])
def list_all_listing_applications(request):
    return _page_response(list_drafts(request.query_params, scoped=False))


@api_view(['GET'])
@permission_classes([AllowAny])
def show_listing_application(request, reference_id):
    return _draft_response(show_draft(reference_id, user=_caller(request)))


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def edit_listing_application(request):
    data = to_plain_dict(request.data)
    draft = edit_draft(data.get('id'), data, _uploads(request), user=request.user)
    return _draft_response(draft)


@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def delete_listing_application(request):
    draft_id = request.query_params.get('id') or to_plain_dict(request.data).get('id')
    delete_draft(draft_id, request.user)
    return send_success({'message': 'Listing application deleted successfully'})
