# integrations/http.py

import logging
import time

import requests

from core.exceptions import IntegrationError

logger = logging.getLogger(__name__)


def call_service(service, method, url, timeout, **kwargs):
    """
    Send one request to an external service and return the decoded JSON body.

    Every call is logged with its status and duration. Timeouts, connection
    problems and non-2xx answers are raised as IntegrationError so callers can
    decide whether the failure is fatal.
    """
    started = time.monotonic()
    try:
        response = requests.request(method, url, timeout=timeout, **kwargs)
    except requests.RequestException as exc:
        logger.error(
            f"{service} request failed: {exc}",
            extra={'service': service, 'method': method, 'url': url,
                   'duration_ms': int((time.monotonic() - started) * 1000)},
        )
        raise IntegrationError(service, str(exc)) from exc

    duration_ms = int((time.monotonic() - started) * 1000)
    logger.info(
        f"{service} {method} {url} -> {response.status_code}",
        extra={'service': service, 'method': method, 'url': url,
               'status_code': response.status_code, 'duration_ms': duration_ms},
    )

    if not response.ok:
        message = _error_message(response)
        logger.error(
            f"{service} returned {response.status_code}: {message}",
            extra={'service': service, 'status_code': response.status_code, 'body': response.text[:500]},
        )
        raise IntegrationError(service, message, status_code=response.status_code)

    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError as exc:
        raise IntegrationError(service, 'Response is not valid JSON', status_code=response.status_code) from exc


def _error_message(response):
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason
    error = body.get('error') if isinstance(body, dict) else None
    if isinstance(error, dict):
        return error.get('message') or str(error)
    if error:
        return str(error)
    if isinstance(body, dict) and body.get('message'):
        return body['message']
    return response.reason or 'Request failed'
