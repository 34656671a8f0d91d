"""
Delayed, cancellable article view counting.

A view only counts once the reader has stayed on the article for
``VIEW_TRACKING_DELAY`` seconds. ``ViewTracker`` schedules the
``increment_article_views`` task with that countdown and revokes it if the
reader leaves (or switches article) first.

Usage:
    >>> tracker = ViewTracker("my-article")
    >>> task_id = tracker.start()      # on page show
    >>> tracker.cancel()               # on page hide, if still pending
"""

from __future__ import annotations

import logging
from typing import Optional

from django.conf import settings
from kombu.exceptions import OperationalError

from .tasks import increment_article_views

logger = logging.getLogger('newsroom')


def default_delay() -> float:
    return float(getattr(settings, 'VIEW_TRACKING_DELAY', 3.0))


class ViewTracker:
    """
    One pending view-count call for one article slug.

    Args:
        article_slug: Article identifier; an empty slug is never tracked.
        delay: Seconds to wait before counting (default from settings).
    """

    def __init__(self, article_slug: str, delay: Optional[float] = None):
        self.article_slug = article_slug or ''
        self.delay = default_delay() if delay is None else delay
        self._result = None

    @property
    def task_id(self) -> Optional[str]:
        return self._result.id if self._result is not None else None

    @property
    def is_pending(self) -> bool:
        return self._result is not None

    def start(self) -> Optional[str]:
        """
        Schedule the view-count call.

        Returns:
            The Celery task id, or ``None`` when nothing was scheduled (empty
            slug or broker failure). Repeated calls reuse the pending task.
        """
        if not self.article_slug:
            return None
        if self._result is not None:
            return self._result.id

        try:
            self._result = increment_article_views.apply_async(
                kwargs={'article_slug': self.article_slug},
                countdown=self.delay,
            )
        except OperationalError:
            logger.exception("Error scheduling article view for %s", self.article_slug)
            return None

        logger.debug(
            "Scheduled view count for %s in %.1fs (task %s)",
            self.article_slug, self.delay, self._result.id,
        )
        return self._result.id

    def cancel(self) -> bool:
        """Revoke the pending call. Returns ``True`` if one was pending."""
        if self._result is None:
            return False
        result, self._result = self._result, None
        try:
            result.revoke()
        except OperationalError:
            logger.exception("Error cancelling article view task %s", result.id)
            return False
        logger.debug("Cancelled view count for %s (task %s)", self.article_slug, result.id)
        return True

    def change_slug(self, article_slug: str) -> Optional[str]:
        """Re-target the tracker; a pending call for the old slug is cancelled."""
        article_slug = article_slug or ''
        if article_slug == self.article_slug:
            return self.task_id
        self.cancel()
        self.article_slug = article_slug
        return self.start()


def cancel_view_task(task_id: str) -> bool:
    """Revoke a view-count call scheduled by an earlier request."""
    if not task_id:
        return False
    try:
        increment_article_views.AsyncResult(task_id).revoke()
    except OperationalError:
        logger.exception("Error cancelling article view task %s", task_id)
        return False
    return True
