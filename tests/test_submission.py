import json
import threading
from unittest.mock import patch

import pytest
from django.db import IntegrityError, OperationalError, connections
from django.utils import timezone
from freezegun import freeze_time

from core.exceptions import IntegrationError, NotFoundError, SubmissionError, UnauthorizedError
from listings.models import STATUS_PENDING, ListingApplication, PersonalData, Property, PropertyData
from listings.submission import build_folder, submit_listing_application
from tests.utils.factories import create_draft, create_user

pytestmark = pytest.mark.django_db

PAYMENT_LINK = 'https://buy.stripe.test/abc'


@pytest.fixture(autouse=True)
def payment_link():
    with patch('listings.submission.create_property_fee_link', return_value=PAYMENT_LINK) as mocked:
        yield mocked


def test_submit_creates_property_trio_and_deletes_draft(draft, user, payment_link):
    property_obj = submit_listing_application(draft.reference_id, user)

    assert property_obj.status == STATUS_PENDING
    assert property_obj.interface == 'web'
    assert property_obj.created_by == user
    assert property_obj.last_updated_by == user
    assert property_obj.personal_data.email == 'anna@example.com'
    assert not ListingApplication.objects.filter(pk=draft.pk).exists()

    data = property_obj.property_data
    assert data.images == 'https://img.test/a.jpg, https://img.test/b.jpg'
    assert data.payment_link == PAYMENT_LINK
    assert data.deposit == 850
    payment_link.assert_called_once()
    assert payment_link.call_args.kwargs['image_url'] == 'https://img.test/a.jpg'


def test_locale_wrap_seeding(draft, user):
    property_obj = submit_listing_application(draft.reference_id, user)
    data = PropertyData.objects.get(property=property_obj)

    assert json.loads(data.description) == {'en': 'Nice room', 'nl': '', 'fr': ''}
    assert json.loads(data.title) == {'en': 'Available room', 'nl': '', 'fr': ''}
    assert json.loads(data.bills) == {'en': '120', 'nl': '', 'fr': ''}
    assert json.loads(data.flatmates) == {'en': '2 students', 'nl': '', 'fr': ''}


def test_period_derived_from_availability(draft, user):
    property_obj = submit_listing_application(draft.reference_id, user)
    period = json.loads(property_obj.property_data.period)
    assert period['en'] == '2026-11-01 - 2027-05-01'


def test_explicit_period_is_kept(user):
    draft = create_draft(user=user, period='6 months')
    property_obj = submit_listing_application(draft.reference_id, user)
    assert json.loads(property_obj.property_data.period)['en'] == '6 months'


@freeze_time('2026-10-19 14:30:00')
def test_folder_label():
    assert build_folder('A lovely room in the centre', timezone.now()) == 'A lovely r|2026-10-19 14:30:00'


def test_payment_link_failure_is_not_fatal(draft, user, payment_link):
    payment_link.side_effect = IntegrationError('stripe', 'card_error')

    property_obj = submit_listing_application(draft.reference_id, user)

    assert property_obj.property_data.payment_link is None
    assert not ListingApplication.objects.filter(pk=draft.pk).exists()


def test_no_payment_link_without_images(user, payment_link):
    draft = create_draft(user=user, images='')
    property_obj = submit_listing_application(draft.reference_id, user)

    payment_link.assert_not_called()
    assert property_obj.property_data.payment_link is None


def test_failure_rolls_back_everything(draft, user):
    with patch('listings.submission.PropertyData.objects.create', side_effect=IntegrityError('constraint violated')):
        with pytest.raises(SubmissionError) as excinfo:
            submit_listing_application(draft.reference_id, user)

    assert excinfo.value.message == 'constraint violated'
    assert Property.objects.count() == 0
    assert PersonalData.objects.count() == 0
    assert ListingApplication.objects.filter(pk=draft.pk).exists()


def test_aborted_transaction_message_is_rewritten(draft, user):
    error = OperationalError('SQLSTATE[25P02]: current transaction is aborted')
    with patch('listings.submission.PropertyData.objects.create', side_effect=error):
        with pytest.raises(SubmissionError) as excinfo:
            submit_listing_application(draft.reference_id, user)

    assert excinfo.value.message.startswith(
        'A database error occurred during submit. Please check that all required fields are filled. Original: '
    )
    assert '25P02' in excinfo.value.message


def test_second_submit_is_not_found(draft, user):
    submit_listing_application(draft.reference_id, user)

    with pytest.raises(NotFoundError):
        submit_listing_application(draft.reference_id, user)
    assert Property.objects.count() == 1


def test_other_owner_cannot_submit(draft, other_user):
    with pytest.raises(NotFoundError):
        submit_listing_application(draft.reference_id, other_user)
    assert ListingApplication.objects.filter(pk=draft.pk).exists()


def test_anonymous_submit_is_unauthorized(draft):
    with pytest.raises(UnauthorizedError):
        submit_listing_application(draft.reference_id, None)


def test_reformat_job_dispatched_after_commit(draft, user, django_capture_on_commit_callbacks):
    with patch('listings.submission.dispatch_reformat_job') as dispatch:
        with django_capture_on_commit_callbacks(execute=True):
            property_obj = submit_listing_application(draft.reference_id, user)

    dispatch.assert_called_once_with(property_obj.pk)


def test_dispatch_failure_does_not_break_submit(draft, user, django_capture_on_commit_callbacks):
    with patch('listings.submission.dispatch_reformat_job', side_effect=ConnectionError('broker down')):
        with django_capture_on_commit_callbacks(execute=True):
            property_obj = submit_listing_application(draft.reference_id, user)

    assert Property.objects.filter(pk=property_obj.pk).exists()


def test_locked_draft_is_retried_and_then_not_found(draft, user):
    locked = OperationalError('database table is locked: listing_applications')

    with patch('listings.submission.time.sleep') as sleep, \
            patch('listings.submission._submit_once',
                  side_effect=[locked, NotFoundError('Listing application not found')]):
        with pytest.raises(NotFoundError):
            submit_listing_application(draft.reference_id, user)

    sleep.assert_called_once()


def test_locked_draft_is_retried_until_it_succeeds(draft, user):
    real_create = PropertyData.objects.create
    calls = []

    def create_after_lock(**kwargs):
        calls.append(kwargs)
        if len(calls) == 1:
            raise OperationalError('database is locked')
        return real_create(**kwargs)

    with patch('listings.submission.time.sleep'), \
            patch('listings.submission.PropertyData.objects.create', side_effect=create_after_lock):
        property_obj = submit_listing_application(draft.reference_id, user)

    assert len(calls) == 2
    assert Property.objects.count() == 1
    assert PersonalData.objects.filter(property=property_obj).count() == 1
    assert not ListingApplication.objects.filter(pk=draft.pk).exists()


def test_lock_contention_gives_up_after_retries(draft, user):
    locked = OperationalError('database is locked')

    with patch('listings.submission.time.sleep') as sleep, \
            patch('listings.submission._submit_once', side_effect=locked):
        with pytest.raises(SubmissionError) as excinfo:
            submit_listing_application(draft.reference_id, user)

    assert 'database is locked' in excinfo.value.message
    assert sleep.call_count == 4


@pytest.mark.django_db(transaction=True)
def test_concurrent_submits_create_one_property():
    user = create_user()
    draft = create_draft(user=user)
    barrier = threading.Barrier(2)
    outcomes = []

    def submit():
        barrier.wait()
        try:
            submit_listing_application(draft.reference_id, user)
            outcomes.append('ok')
        except NotFoundError:
            outcomes.append('not_found')
        except Exception as exc:
            outcomes.append(f"{type(exc).__name__}: {exc}")
        finally:
            connections.close_all()

    with patch('listings.submission.dispatch_reformat_job'):
        threads = [threading.Thread(target=submit) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    assert sorted(outcomes) == ['not_found', 'ok']
    assert Property.objects.count() == 1
    assert not ListingApplication.objects.exists()
