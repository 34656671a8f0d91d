"""
Celery tasks for the GH News site.

Both tasks are best-effort side effects: failures are logged and reported in
the returned summary string, never retried and never raised to the caller.

    1. increment_article_views(article_slug)
       The view-count procedure. Scheduled with a countdown by
       ``ViewTracker`` and revoked when the reader leaves early.
    2. notify_search_engines(article_id)
       Tells search engines about a freshly published article.
"""

from __future__ import annotations

import logging

from celery import shared_task
from django.db import DatabaseError
from django.db.models import F

from .models import Article

logger = logging.getLogger('newsroom')


@shared_task(ignore_result=True)
def increment_article_views(article_slug: str) -> str:
    """
    Atomically add one view to the article identified by ``article_slug``.

    Returns:
        Summary string.
    """
    try:
        updated = Article.objects.filter(slug=article_slug).update(views=F('views') + 1)
    except DatabaseError:
        logger.exception("Error tracking article view for %s", article_slug)
        return f"View not tracked for {article_slug}"

    if not updated:
        logger.warning("View tracked for unknown article slug %s", article_slug)
        return f"Article {article_slug} not found"

    logger.info("Article view tracked for: %s", article_slug)
    return f"View tracked for {article_slug}"


@shared_task
def notify_search_engines(article_id: int) -> str:
    """
    Notify search engines that a published article is available.

    Args:
        article_id: PK of the ``Article``.

    Returns:
        Summary string.
    """
    try:
        article = Article.objects.get(id=article_id)
    except Article.DoesNotExist:
        logger.error("Article %d not found", article_id)
        return f"Article {article_id} not found"

    if not article.is_published:
        logger.info("Skipping search-engine notification for unpublished article %d", article_id)
        return f"Article {article_id} is not published"

    from .services.indexing_service import SearchIndexingService

    service = SearchIndexingService()
    notified = service.notify_article_published(article.absolute_site_url)

    if notified:
        logger.info("Search engines notified for %s", article.slug)
        return f"Notified search engines for {article.slug}"
    logger.warning("Search-engine notification failed for %s", article.slug)
    return f"Notification failed for {article.slug}"
