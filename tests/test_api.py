from unittest.mock import patch

import pytest
from django.urls import reverse

from listings.models import ListingApplication, Property
from tests.utils.factories import create_draft, step2_payload, step3_payload

pytestmark = pytest.mark.django_db

BASE = '/api/v1/listing-application'


@pytest.fixture(autouse=True)
def no_external_calls():
    with patch('listings.submission.create_property_fee_link', return_value='https://pay.test/x'), \
            patch('listings.submission.dispatch_reformat_job'):
        yield


class TestStepValidation:

    def test_step2_without_terms_outside_terms_domains(self, api_client):
        payload = step2_payload()
        payload.pop('terms')

        response = api_client.post(f"{BASE}/validate/step-2/", payload, format='json')

        assert response.status_code == 200
        assert response.data['status'] is True
        assert response.data['data']['step'] == 3
        assert response.data['data']['referenceId']
        assert response.data['data']['user_id'] is None

    def test_step2_terms_required_for_listed_origin(self, api_client):
        payload = step2_payload()
        payload.pop('terms')

        response = api_client.post(
            f"{BASE}/validate/step-2/", payload, format='json', HTTP_ORIGIN='https://www.domakin.nl',
        )

        assert response.status_code == 400
        assert response.data['status'] is False
        assert response.data['tag'] == 'api.fill_fields'
        assert 'terms' in response.data['invalid_fields']
        assert ListingApplication.objects.count() == 0

    def test_step2_unaccepted_terms_are_reported_per_key(self, api_client):
        payload = step2_payload(terms={'contact': True, 'legals': False})

        response = api_client.post(
            f"{BASE}/validate/step-2/", payload, format='json', HTTP_REFERER='http://localhost:3000/list',
        )

        assert response.status_code == 400
        assert response.data['invalid_fields'] == {
            'terms.legals': 'account:authentication.errors.terms_must_be_accepted',
        }

    def test_invalid_email_uses_translation_key(self, api_client):
        response = api_client.post(f"{BASE}/validate/step-2/", step2_payload(email='nope'), format='json')

        assert response.status_code == 400
        assert response.data['invalid_fields']['email'] == 'account:authentication.errors.email_invalid'

    def test_step3_updates_existing_draft(self, api_client):
        first = api_client.post(f"{BASE}/validate/step-2/", step2_payload(), format='json')
        reference_id = first.data['data']['referenceId']

        response = api_client.post(
            f"{BASE}/validate/step-3/", step3_payload(referenceId=reference_id), format='json',
        )

        assert response.status_code == 200
        draft = ListingApplication.objects.get(reference_id=reference_id)
        assert draft.step == 4
        assert draft.city == 'Amsterdam'
        assert ListingApplication.objects.count() == 1

    def test_unknown_step(self, api_client):
        response = api_client.post(f"{BASE}/validate/step-9/", {}, format='json')

        assert response.status_code == 400
        assert 'step' in response.data['invalid_fields']

    def test_authenticated_caller_becomes_owner(self, auth_client, user):
        response = auth_client.post(f"{BASE}/validate/step-2/", step2_payload(), format='json')

        assert response.data['data']['user_id'] == user.pk


class TestDraftEndpoints:

    def test_save_without_validation(self, api_client):
        response = api_client.post(f"{BASE}/save/", {'city': 'Utrecht', 'step': 4}, format='json')

        assert response.status_code == 200
        assert response.data['data']['city'] == 'Utrecht'
        assert response.data['data']['step'] == 1

    def test_save_with_unknown_reference(self, api_client):
        response = api_client.post(f"{BASE}/save/", {'referenceId': 'missing'}, format='json')

        assert response.status_code == 404
        assert response.data == {
            'status': False, 'message': 'Listing application not found', 'tag': 'api.not_found',
        }

    def test_show(self, api_client, draft):
        response = api_client.get(f"{BASE}/{draft.reference_id}/")

        assert response.status_code == 200
        assert response.data['data']['id'] == draft.pk

    def test_list_is_owner_scoped(self, auth_client, draft, other_user):
        create_draft(user=other_user)

        response = auth_client.get(f"{BASE}/list/")

        assert response.status_code == 200
        page = response.data['data']
        assert page['total'] == 1
        assert page['data'][0]['referenceId'] == draft.reference_id
        assert page['current_page'] == 1

    def test_list_requires_authentication(self, api_client):
        response = api_client.get(f"{BASE}/list/")

        assert response.status_code == 401
        assert response.data['status'] is False

    def test_list_extended_for_admin(self, admin_client_jwt, draft, other_user):
        create_draft(user=other_user)

        response = admin_client_jwt.get(f"{BASE}/list-extended/", {'city': 'amster'})

        assert response.status_code == 200
        assert response.data['data']['total'] == 2

    def test_list_extended_forbidden_for_regular_users(self, auth_client):
        response = auth_client.get(f"{BASE}/list-extended/")

        assert response.status_code == 403

    def test_edit(self, auth_client, draft):
        response = auth_client.patch(f"{BASE}/edit/", {'id': draft.pk, 'city': 'Rotterdam'}, format='json')

        assert response.status_code == 200
        draft.refresh_from_db()
        assert draft.city == 'Rotterdam'

    def test_edit_other_users_draft(self, other_client, draft):
        response = other_client.patch(f"{BASE}/edit/", {'id': draft.pk, 'city': 'Rotterdam'}, format='json')

        assert response.status_code == 404

    def test_delete(self, auth_client, draft):
        response = auth_client.delete(f"{BASE}/delete/?id={draft.pk}")

        assert response.status_code == 200
        assert not ListingApplication.objects.filter(pk=draft.pk).exists()

    def test_delete_requires_authentication(self, api_client, draft):
        response = api_client.delete(f"{BASE}/delete/?id={draft.pk}")

        assert response.status_code == 401
        assert ListingApplication.objects.filter(pk=draft.pk).exists()


class TestSubmitEndpoint:

    def test_submit(self, auth_client, draft):
        response = auth_client.post(reverse('listing-application-submit'), {'referenceId': draft.reference_id}, format='json')

        assert response.status_code == 201
        body = response.data['data']
        assert body['personal_data']['email'] == 'anna@example.com'
        assert body['property_data']['description'] == {'en': 'Nice room', 'nl': '', 'fr': ''}
        assert body['property_data']['payment_link'] == 'https://pay.test/x'
        assert not ListingApplication.objects.filter(pk=draft.pk).exists()

    def test_submit_anonymous(self, api_client, draft):
        response = api_client.post(reverse('listing-application-submit'), {'referenceId': draft.reference_id}, format='json')

        assert response.status_code == 401
        assert Property.objects.count() == 0

    def test_submit_twice(self, auth_client, draft):
        url = reverse('listing-application-submit')
        auth_client.post(url, {'referenceId': draft.reference_id}, format='json')

        response = auth_client.post(url, {'referenceId': draft.reference_id}, format='json')

        assert response.status_code == 404
        assert Property.objects.count() == 1

    def test_invalid_token_is_rejected(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')

        response = api_client.post(reverse('listing-application-submit'), {}, format='json')

        assert response.status_code == 401
        assert response['WWW-Authenticate'] == 'Bearer'
