"""Status changes made by editors, and the side effects that follow them."""

from __future__ import annotations

import logging

from django.utils import timezone
from kombu.exceptions import OperationalError

from .models import Article, ArticleStatus

logger = logging.getLogger('newsroom')


def announce_published(article: Article) -> None:
    """Queue search-engine notification for a published article (best effort)."""
    from .tasks import notify_search_engines

    try:
        notify_search_engines.delay(article.id)
    except OperationalError:
        logger.exception("Could not queue search-engine notification for %s", article.slug)


def prepare_for_save(article: Article, previous_status: str | None) -> bool:
    """
    Stamp ``published_at`` on first publication.

    Returns:
        ``True`` if the article has just become published.
    """
    became_published = (
        article.status == ArticleStatus.PUBLISHED
        and previous_status != ArticleStatus.PUBLISHED
    )
    if became_published and article.published_at is None:
        article.published_at = timezone.now()
    return became_published


def set_status(articles, status: str) -> int:
    """Move every article in ``articles`` to ``status``; returns the count changed."""
    changed = 0
    for article in articles:
        if article.status == status:
            continue
        previous = article.status
        article.status = status
        became_published = prepare_for_save(article, previous)
        article.save(update_fields=['status', 'published_at', 'updated_at'])
        if became_published:
            announce_published(article)
        changed += 1
    logger.info("Set status %s on %d article(s)", status, changed)
    return changed
