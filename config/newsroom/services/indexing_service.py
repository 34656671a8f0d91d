"""
Search-engine notification for newly published articles.

Two channels, tried in order:

1. Google Indexing API (``URL_UPDATED`` notification). Needs an OAuth
   bearer token in ``settings.GOOGLE_INDEXING_TOKEN``; skipped without one.
2. Sitemap ping. Asks the search engine to re-read ``/sitemap.xml``.

Usage:
    >>> from newsroom.services.indexing_service import SearchIndexingService
    >>> svc = SearchIndexingService()
    >>> svc.notify_article_published("https://ghnewsmedia.com/news/my-article/")
    True
"""

from __future__ import annotations

import logging

import requests
from django.conf import settings

logger = logging.getLogger('newsroom')

_DEFAULT_TIMEOUT: int = getattr(settings, 'INDEXING_REQUEST_TIMEOUT', 10)


class SearchIndexingService:
    """
    Notify search engines about article URLs. Never raises on network errors.

    Args:
        token: Google Indexing API bearer token (default from settings).
        site_url: Public site root used to build the sitemap URL.
    """

    def __init__(self, token: str | None = None, site_url: str | None = None) -> None:
        self.token = token if token is not None else getattr(settings, 'GOOGLE_INDEXING_TOKEN', '')
        self.site_url = (site_url or settings.SITE_URL).rstrip('/')
        self.indexing_api_url = settings.GOOGLE_INDEXING_API_URL
        self.ping_url = settings.SITEMAP_PING_URL
        self.session = requests.Session()
        self.session.headers.update({'User-Agent': 'GHNews/1.0'})

    @property
    def sitemap_url(self) -> str:
        return f"{self.site_url}/sitemap.xml"

    def notify_article_published(self, url: str) -> bool:
        """
        Announce ``url``; falls back to a sitemap ping if the API is unusable.

        Returns:
            ``True`` if either channel accepted the notification.
        """
        if self.submit_url(url):
            return True
        return self.ping_sitemap()

    def submit_url(self, url: str) -> bool:
        if not self.token:
            logger.debug("No Google Indexing token configured; skipping API submission")
            return False

        try:
            response = self.session.post(
                self.indexing_api_url,
                json={'url': url, 'type': 'URL_UPDATED'},
                headers={'Authorization': f'Bearer {self.token}'},
                timeout=_DEFAULT_TIMEOUT,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("Google Indexing API error for %s: %s", url, exc)
            return False

        logger.info("Google Indexing API accepted %s", url)
        return True

    def ping_sitemap(self) -> bool:
        try:
            response = self.session.get(
                self.ping_url,
                params={'sitemap': self.sitemap_url},
                timeout=_DEFAULT_TIMEOUT,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("Sitemap ping failed for %s: %s", self.sitemap_url, exc)
            return False

        logger.info("Sitemap ping sent for %s", self.sitemap_url)
        return True
