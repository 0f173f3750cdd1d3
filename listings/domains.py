# listings/domains.py

from urllib.parse import urlsplit


def extract_host(value):
    """Return the lowercase host of a URL or bare hostname, without the port."""
    if not value:
        return None
    value = value.strip()
    if '://' in value:
        host = urlsplit(value).hostname
    else:
        host = value.split('/', 1)[0].split(':', 1)[0]
    return host.lower() if host else None


def requires_terms(origin, domains):
    """
    True when ``origin`` belongs to one of ``domains``.

    A domain matches exactly or as a parent of the origin host
    (``www.example.com`` matches ``example.com``). A missing origin never
    requires terms.
    """
    host = extract_host(origin)
    if not host:
        return False

    for domain in domains:
        domain_host = extract_host(domain)
        if not domain_host:
            continue
        if host == domain_host or host.endswith('.' + domain_host):
            return True
    return False


def request_origin(request):
    """Origin header of the request, falling back to Referer."""
    return request.headers.get('Origin') or request.headers.get('Referer')
