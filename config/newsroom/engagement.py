"""
Reader engagement: threaded comments and per-session reactions.

Comments are stored flat with a ``parent`` link and assembled into threads
for display. Reactions are keyed by an anonymous reader session id kept in
the Django session, so a reader has at most one reaction per article.

Usage:
    >>> threads = comment_threads(article)
    >>> current = toggle_reaction(article, reader_session_id(request), 'heart')
    >>> reaction_counts(article)
    {'likes': 0, 'hearts': 1, 'laughs': 0, 'angry': 0}
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Optional

from django.conf import settings
from django.db import transaction
from django.db.models import Count, Q

from .models import Comment, Reaction, ReactionType

logger = logging.getLogger('newsroom')

SESSION_KEY = 'ghnews_session_id'

REACTION_COUNT_KEYS = {
    ReactionType.LIKE.value: 'likes',
    ReactionType.HEART.value: 'hearts',
    ReactionType.LAUGH.value: 'laughs',
    ReactionType.ANGRY.value: 'angry',
}


# =============================================================================
# Comments
# =============================================================================


@dataclass
class CommentThread:
    comment: Comment
    replies: list[CommentThread] = field(default_factory=list)

    @property
    def replies_count(self) -> int:
        return len(self.replies)


def comments_require_approval() -> bool:
    return bool(getattr(settings, 'COMMENTS_REQUIRE_APPROVAL', True))


def comment_threads(article) -> list[CommentThread]:
    """
    Approved comments of ``article`` as threads, oldest first.

    A reply whose parent is not approved is hidden together with it.
    """
    comments = list(article.comments.filter(approved=True).order_by('created_at', 'pk'))
    nodes = {comment.pk: CommentThread(comment) for comment in comments}

    roots = []
    for comment in comments:
        node = nodes[comment.pk]
        if comment.parent_id is None:
            roots.append(node)
        elif comment.parent_id in nodes:
            nodes[comment.parent_id].replies.append(node)
    return roots


def add_comment(article, author_name: str, content: str,
                parent: Optional[Comment] = None, user=None) -> Comment:
    """
    Store a reader comment on ``article``.

    Raises:
        ValueError: ``parent`` belongs to a different article.
    """
    if parent is not None and parent.article_id != article.pk:
        raise ValueError("Reply target belongs to another article")

    comment = Comment.objects.create(
        article=article,
        parent=parent,
        user=user if user is not None and user.is_authenticated else None,
        author_name=author_name.strip(),
        content=content.strip(),
        approved=not comments_require_approval(),
    )
    logger.info(
        "Comment %d added to %s (%s)",
        comment.id, article.slug, 'approved' if comment.approved else 'pending',
    )
    return comment


def set_comments_approved(comments, approved: bool) -> int:
    return comments.update(approved=approved)


# =============================================================================
# Reactions
# =============================================================================


def reader_session_id(request) -> str:
    """Anonymous id of the reader, created on first use."""
    session_id = request.session.get(SESSION_KEY)
    if not session_id:
        session_id = uuid.uuid4().hex
        request.session[SESSION_KEY] = session_id
    return session_id


def reaction_counts(article) -> dict[str, int]:
    return article.reactions.aggregate(**{
        key: Count('id', filter=Q(type=reaction_type))
        for reaction_type, key in REACTION_COUNT_KEYS.items()
    })


def reaction_buttons(article) -> list[tuple[str, str, int]]:
    """``(type, label, count)`` per reaction type, in display order."""
    counts = reaction_counts(article)
    return [
        (value, label, counts[REACTION_COUNT_KEYS[value]])
        for value, label in ReactionType.choices
    ]


def session_reaction(article, session_id: Optional[str]) -> Optional[str]:
    if not session_id:
        return None
    return (
        Reaction.objects.filter(article=article, session_id=session_id)
        .values_list('type', flat=True)
        .first()
    )


def toggle_reaction(article, session_id: str, reaction_type: str) -> Optional[str]:
    """
    Apply a reaction click for one reader session.

    Clicking the current reaction removes it; clicking another one replaces
    it. Returns the session's reaction afterwards, or ``None``.

    Raises:
        ValueError: unknown ``reaction_type``.
    """
    if reaction_type not in ReactionType.values:
        raise ValueError(f"Unknown reaction type: {reaction_type!r}")

    with transaction.atomic():
        existing = (
            Reaction.objects.select_for_update()
            .filter(article=article, session_id=session_id)
            .first()
        )
        if existing is not None and existing.type == reaction_type:
            existing.delete()
            return None
        Reaction.objects.update_or_create(
            article=article,
            session_id=session_id,
            defaults={'type': reaction_type},
        )
    return reaction_type
