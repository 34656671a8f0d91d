"""
Models for the GH News publishing site.

    - Category: editorial sections (Politics, Sports, ...)
    - AuthorProfile: public byline and staff role of a site user
    - Tag: free-form labels attached to articles
    - Article: the news story itself, with status, engagement and SEO fields
    - Comment: moderated reader comments with threaded replies
    - Reaction: one like/heart/laugh/angry per reader session and article

Slug uniqueness is enforced by the database. Status values carry no
transition rules; editors may move an article between any two states.
"""

from django.conf import settings
from django.contrib.auth.models import User
from django.db import models
from django.urls import reverse


class ArticleStatus(models.TextChoices):
    DRAFT = 'draft', 'Draft'
    PUBLISHED = 'published', 'Published'
    ARCHIVED = 'archived', 'Archived'


class UserRole(models.TextChoices):
    ADMIN = 'admin', 'Admin'
    EDITOR = 'editor', 'Editor'
    MODERATOR = 'moderator', 'Moderator'
    USER = 'user', 'User'


# Roles that may open the staff dashboard.
DASHBOARD_ROLES = (UserRole.ADMIN, UserRole.EDITOR)


class Category(models.Model):
    """An editorial section. ``color`` and ``icon`` drive the category badge."""

    name = models.CharField(max_length=100, verbose_name="Name")
    slug = models.SlugField(max_length=100, unique=True, verbose_name="Slug")
    description = models.TextField(blank=True, default='', verbose_name="Description")
    color = models.CharField(
        max_length=20,
        blank=True,
        default='#1d4ed8',
        verbose_name="Color",
        help_text="CSS colour used for the category badge",
    )
    icon = models.CharField(
        max_length=50,
        blank=True,
        default='',
        verbose_name="Icon",
        help_text="Icon name shown next to the category",
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="Created At")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="Updated At")

    class Meta:
        verbose_name = "Category"
        verbose_name_plural = "Categories"
        ordering = ['name']

    def __str__(self) -> str:
        return self.name

    def get_absolute_url(self) -> str:
        return reverse('newsroom:category_detail', kwargs={'slug': self.slug})


class AuthorProfile(models.Model):
    """
    Byline and staff role for a site user.

    The ``role`` decides dashboard access: ``admin`` and ``editor`` may use
    it, ``moderator`` and ``user`` may not.

    Example:
        >>> profile = AuthorProfile.objects.create(
        ...     user=user,
        ...     name="Ama Mensah",
        ...     title="Political Correspondent",
        ...     role=UserRole.EDITOR,
        ... )
    """

    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        related_name='author_profile',
        null=True,
        blank=True,
        verbose_name="User",
    )
    name = models.CharField(max_length=200, verbose_name="Name")
    bio = models.TextField(blank=True, default='', verbose_name="Bio")
    avatar = models.URLField(blank=True, default='', verbose_name="Avatar URL")
    title = models.CharField(max_length=200, blank=True, default='', verbose_name="Title")
    role = models.CharField(
        max_length=10,
        choices=UserRole.choices,
        default=UserRole.USER,
        verbose_name="Role",
    )
    twitter = models.CharField(max_length=100, blank=True, default='', verbose_name="Twitter")
    facebook = models.CharField(max_length=200, blank=True, default='', verbose_name="Facebook")
    linkedin = models.CharField(max_length=200, blank=True, default='', verbose_name="LinkedIn")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="Created At")

    class Meta:
        verbose_name = "Author"
        verbose_name_plural = "Authors"
        ordering = ['name']

    def __str__(self) -> str:
        return f"{self.name} ({self.get_role_display()})"

    @property
    def can_use_dashboard(self) -> bool:
        return self.role in DASHBOARD_ROLES

    def get_absolute_url(self) -> str:
        return reverse('newsroom:author_detail', kwargs={'pk': self.pk})


class Tag(models.Model):
    name = models.CharField(max_length=60, verbose_name="Name")
    slug = models.SlugField(max_length=60, unique=True, verbose_name="Slug")

    class Meta:
        ordering = ['name']

    def __str__(self) -> str:
        return self.name


class ArticleQuerySet(models.QuerySet):
    def published(self):
        return self.filter(status=ArticleStatus.PUBLISHED)

    def with_relations(self):
        return self.select_related('category', 'author').prefetch_related('tags')


class Article(models.Model):
    """
    A news story.

    ``views`` is only ever changed by the ``increment_article_views`` task;
    the admin shows it read-only.

    Example:
        >>> article = Article.objects.create(
        ...     title="Election Results Announced",
        ...     slug="election-results-announced",
        ...     content="<p>Full story...</p>",
        ...     status=ArticleStatus.PUBLISHED,
        ... )
    """

    title = models.CharField(max_length=300, verbose_name="Title")
    slug = models.SlugField(
        max_length=300,
        unique=True,
        verbose_name="Slug",
        help_text="Unique URL segment, also the view-tracking key",
    )
    excerpt = models.TextField(blank=True, default='', verbose_name="Excerpt")
    content = models.TextField(verbose_name="Content", help_text="Rich-text HTML body")
    featured_image = models.URLField(blank=True, default='', verbose_name="Featured Image")
    status = models.CharField(
        max_length=10,
        choices=ArticleStatus.choices,
        default=ArticleStatus.DRAFT,
        db_index=True,
        verbose_name="Status",
    )
    featured = models.BooleanField(default=False, verbose_name="Featured")
    trending = models.BooleanField(default=False, verbose_name="Trending")
    views = models.PositiveIntegerField(default=0, verbose_name="Views")
    read_time = models.PositiveSmallIntegerField(default=5, verbose_name="Read Time (min)")
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='articles',
        verbose_name="Category",
    )
    author = models.ForeignKey(
        AuthorProfile,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='articles',
        verbose_name="Author",
    )
    tags = models.ManyToManyField(Tag, blank=True, related_name='articles', verbose_name="Tags")
    meta_title = models.CharField(max_length=300, blank=True, default='', verbose_name="Meta Title")
    meta_description = models.TextField(blank=True, default='', verbose_name="Meta Description")
    keywords = models.JSONField(
        default=list,
        blank=True,
        verbose_name="Keywords",
        help_text="SEO keywords as a JSON list of strings",
    )
    published_at = models.DateTimeField(null=True, blank=True, db_index=True, verbose_name="Published At")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="Created At")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="Updated At")

    objects = ArticleQuerySet.as_manager()

    class Meta:
        verbose_name = "Article"
        verbose_name_plural = "Articles"
        ordering = ['-published_at', '-created_at']
        indexes = [
            models.Index(fields=['status', '-published_at'], name='article_status_pub_idx'),
            models.Index(fields=['category', 'status'], name='article_category_status_idx'),
        ]

    def __str__(self) -> str:
        return f"[{self.status}] {self.title[:80]}"

    def get_absolute_url(self) -> str:
        return reverse('newsroom:article_detail', kwargs={'slug': self.slug})

    @property
    def is_published(self) -> bool:
        return self.status == ArticleStatus.PUBLISHED

    @property
    def tag_names(self) -> list[str]:
        return [tag.name for tag in self.tags.all()]

    @property
    def absolute_site_url(self) -> str:
        return f"{settings.SITE_URL}{self.get_absolute_url()}"


class Comment(models.Model):
    """
    A reader comment on an article, optionally replying to another comment.

    New comments wait for moderation (``approved=False``) unless
    ``COMMENTS_REQUIRE_APPROVAL`` is off. Only approved comments are shown
    on the article page.
    """

    article = models.ForeignKey(
        Article,
        on_delete=models.CASCADE,
        related_name='comments',
        verbose_name="Article",
    )
    parent = models.ForeignKey(
        'self',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='replies',
        verbose_name="Reply To",
    )
    user = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='comments',
        verbose_name="User",
    )
    author_name = models.CharField(max_length=100, verbose_name="Author Name")
    content = models.TextField(verbose_name="Content")
    approved = models.BooleanField(default=False, db_index=True, verbose_name="Approved")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="Created At")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="Updated At")

    class Meta:
        verbose_name = "Comment"
        verbose_name_plural = "Comments"
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['article', 'approved', 'created_at'], name='comment_article_approved_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.author_name} on {self.article.slug}"


class ReactionType(models.TextChoices):
    LIKE = 'like', 'Like'
    HEART = 'heart', 'Heart'
    LAUGH = 'laugh', 'Laugh'
    ANGRY = 'angry', 'Angry'


class Reaction(models.Model):
    """One reader session's reaction to an article; at most one per session."""

    article = models.ForeignKey(
        Article,
        on_delete=models.CASCADE,
        related_name='reactions',
        verbose_name="Article",
    )
    session_id = models.CharField(max_length=64, verbose_name="Session ID")
    type = models.CharField(max_length=10, choices=ReactionType.choices, verbose_name="Type")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="Created At")

    class Meta:
        verbose_name = "Reaction"
        verbose_name_plural = "Reactions"
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['article', 'session_id'],
                name='reaction_one_per_session',
            ),
        ]

    def __str__(self) -> str:
        return f"{self.get_type_display()} on {self.article.slug}"
