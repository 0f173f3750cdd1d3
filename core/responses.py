# core/responses.py

from rest_framework import status
from rest_framework.response import Response

GENERAL_ERROR = ('Something went wrong, please try again!', 'api.general_error')
REQUIRED_FIELDS = ('Please fill the required fields!', 'api.fill_fields')


def send_success(data=None, message=None, status_code=status.HTTP_200_OK):
    body = {'status': True}
    if data is not None:
        body['data'] = data
    if message:
        body['message'] = message
    return Response(body, status=status_code)


def send_error(message=GENERAL_ERROR[0], tag=GENERAL_ERROR[1], status_code=status.HTTP_400_BAD_REQUEST):
    return Response({'status': False, 'message': message, 'tag': tag}, status=status_code)


def send_invalid_fields(fields, message=REQUIRED_FIELDS[0], tag=REQUIRED_FIELDS[1]):
    return Response(
        {'status': False, 'invalid_fields': fields, 'message': message, 'tag': tag},
        status=status.HTTP_400_BAD_REQUEST,
    )
