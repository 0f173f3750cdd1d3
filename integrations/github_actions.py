# integrations/github_actions.py

from django.conf import settings

from core.exceptions import IntegrationError

from .http import call_service

API_BASE_URL = 'https://api.github.com'
UPDATE_SITEMAP_EVENT = 'update-sitemap'


def trigger_update_sitemap(owner=None, repo=None, event_type=UPDATE_SITEMAP_EVENT):
    """Fire a repository_dispatch event that rebuilds the frontend sitemap."""
    owner = owner or settings.GITHUB_SITEMAP_OWNER
    repo = repo or settings.GITHUB_SITEMAP_REPO

    if not settings.GITHUB_API_TOKEN:
        raise IntegrationError('github', 'GitHub API token is not configured')
    if not settings.GITHUB_WEBHOOK_TOKEN:
        raise IntegrationError('github', 'GitHub webhook token is not configured')
    if not owner or not repo:
        raise IntegrationError('github', 'Sitemap repository is not configured')

    headers = {
        'Accept': 'application/vnd.github.v3+json',
        'Authorization': f"token {settings.GITHUB_API_TOKEN}",
        'User-Agent': 'rental-listings-api',
    }
    payload = {
        'event_type': event_type,
        'client_payload': {'token': settings.GITHUB_WEBHOOK_TOKEN},
    }
    return call_service(
        'github',
        'POST',
        f"{API_BASE_URL}/repos/{owner}/{repo}/dispatches",
        settings.GITHUB_TIMEOUT,
        json=payload,
        headers=headers,
    )
