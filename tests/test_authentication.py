import pytest
from jose import jwt
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.test import APIRequestFactory

from accounts.authentication import JWTAuthentication, create_token, decode_token

pytestmark = pytest.mark.django_db

factory = APIRequestFactory()


def authenticate(header=None):
    request = factory.get('/', HTTP_AUTHORIZATION=header) if header else factory.get('/')
    return JWTAuthentication().authenticate(request)


def test_no_header_is_anonymous():
    assert authenticate() is None


def test_other_scheme_is_ignored():
    assert authenticate('Basic dXNlcjpwYXNz') is None


def test_valid_token_resolves_user(user):
    resolved, claims = authenticate(f"Bearer {create_token(user.pk, scope='listing')}")

    assert resolved == user
    assert claims['scope'] == 'listing'
    assert decode_token(create_token(user.pk))['sub'] == str(user.pk)


@pytest.mark.parametrize('header', ['Bearer', 'Bearer a b', 'Bearer garbage'])
def test_malformed_tokens(header):
    with pytest.raises(AuthenticationFailed):
        authenticate(header)


def test_token_signed_with_other_key(user):
    token = jwt.encode({'sub': str(user.pk)}, 'another-secret', algorithm='HS256')

    with pytest.raises(AuthenticationFailed):
        authenticate(f"Bearer {token}")


def test_inactive_user(user):
    user.is_active = False
    user.save()

    with pytest.raises(AuthenticationFailed):
        authenticate(f"Bearer {create_token(user.pk)}")


def test_unknown_subject():
    with pytest.raises(AuthenticationFailed):
        authenticate(f"Bearer {create_token(424242)}")
