"""
Views for the GH News site.

Public pages, crawler endpoints, the view-tracking API used by article pages,
reader comments and reactions, and the staff dashboard.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.decorators import user_passes_test
from django.http import Http404, HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.views.decorators.http import require_GET, require_POST

from . import engagement
from .auth import AuthState
from .filters import STATUS_ALL, filter_articles, parse_trending_filter
from .forms import ArticleFilterForm, ArticleForm, CommentForm, CommentModerationFilterForm
from .models import Article, ArticleStatus, AuthorProfile, Category, Comment
from .publishing import announce_published, prepare_for_save
from .seo import SeoConfig, article_page_meta, build_page_meta
from .tracking import ViewTracker, cancel_view_task

logger = logging.getLogger('newsroom')

ROBOTS_TXT_TEMPLATE = """User-agent: Googlebot
Allow: /

User-agent: Bingbot
Allow: /

User-agent: Twitterbot
Allow: /

User-agent: facebookexternalhit
Allow: /

User-agent: *
Allow: /

# Block access to admin and private areas
Disallow: /admin/
Disallow: /dashboard/
Disallow: /auth/
Disallow: /api/
Disallow: /private/

# Sitemaps for better indexing and sitelinks
Sitemap: {base_url}/sitemap.xml
Sitemap: {base_url}/news-sitemap.xml

# RSS Feed for news syndication
Sitemap: {base_url}/rss.xml

# Crawl-delay for respectful crawling
Crawl-delay: 1
"""

ROBOTS_CACHE_CONTROL = 'public, s-maxage=86400, stale-while-revalidate'
NEWS_SITEMAP_CACHE_CONTROL = 'public, s-maxage=1800, stale-while-revalidate=3600'

LATEST_LIMIT = 20


def _staff_required(view):
    return user_passes_test(
        lambda user: AuthState.from_user(user).is_admin,
        login_url='login',
    )(view)


# =============================================================================
# Crawler endpoints
# =============================================================================


@require_GET
def robots_txt(request):
    seo_config = SeoConfig.from_settings()
    body = ROBOTS_TXT_TEMPLATE.format(base_url=seo_config.site_url)
    response = HttpResponse(body, content_type='text/plain')
    response['Cache-Control'] = ROBOTS_CACHE_CONTROL
    return response


@require_GET
def news_sitemap(request):
    """Google News sitemap of articles published within the last two days."""
    window = timedelta(hours=getattr(settings, 'NEWS_SITEMAP_WINDOW_HOURS', 48))
    articles = (
        Article.objects.published()
        .filter(published_at__gte=timezone.now() - window)
        .with_relations()
        .order_by('-published_at')
    )
    response = render(request, 'newsroom/news_sitemap.xml', {
        'articles': articles,
        'publication_name': getattr(settings, 'NEWS_PUBLICATION_NAME', 'GhNewsMedia'),
        'publication_language': getattr(settings, 'NEWS_PUBLICATION_LANGUAGE', 'en'),
    }, content_type='application/xml')
    response['Cache-Control'] = NEWS_SITEMAP_CACHE_CONTROL
    return response


# =============================================================================
# Public pages
# =============================================================================


def home(request):
    published = Article.objects.published().with_relations()
    return render(request, 'newsroom/home.html', {
        'featured_articles': published.filter(featured=True)[:5],
        'trending_articles': published.filter(trending=True)[:5],
        'latest_articles': published[:LATEST_LIMIT],
    })


def _render_article(request, article):
    related = (
        Article.objects.published()
        .filter(category=article.category)
        .exclude(pk=article.pk)
        .select_related('category')[:4]
        if article.category else []
    )
    return render(request, 'newsroom/article_detail.html', {
        'article': article,
        'related_articles': related,
        'page_meta': article_page_meta(article),
        'comment_threads': engagement.comment_threads(article),
        'comment_form': CommentForm(article=article),
        'reaction_buttons': engagement.reaction_buttons(article),
        'user_reaction': engagement.session_reaction(
            article, request.session.get(engagement.SESSION_KEY),
        ),
    })


def article_detail(request, slug):
    article = get_object_or_404(
        Article.objects.published().with_relations(), slug=slug,
    )
    return _render_article(request, article)


def category_article_detail(request, category, slug):
    article = get_object_or_404(
        Article.objects.published().with_relations(), slug=slug,
    )
    if article.category is None or article.category.slug != category:
        raise Http404("Article not found in this category")
    return _render_article(request, article)


def category_detail(request, slug):
    category = get_object_or_404(Category, slug=slug)
    articles = Article.objects.published().with_relations().filter(category=category)
    page_meta = build_page_meta(
        SeoConfig.from_settings(),
        title=category.name,
        description=category.description or None,
        path=request.path,
    )
    return render(request, 'newsroom/category_detail.html', {
        'category': category,
        'articles': articles,
        'page_meta': page_meta,
    })


def category_detail_by_segment(request, category):
    """``/<category>/`` short form of the category page."""
    return category_detail(request, slug=category)


def author_detail(request, pk):
    author = get_object_or_404(AuthorProfile, pk=pk)
    articles = Article.objects.published().with_relations().filter(author=author)
    page_meta = build_page_meta(
        SeoConfig.from_settings(),
        title=author.name,
        description=author.bio or None,
        path=request.path,
    )
    return render(request, 'newsroom/author_detail.html', {
        'author': author,
        'articles': articles,
        'page_meta': page_meta,
    })


def search(request):
    query = request.GET.get('q', '').strip()
    articles = []
    if query:
        articles = filter_articles(
            Article.objects.published().with_relations(), query, STATUS_ALL,
        )
    page_meta = build_page_meta(
        SeoConfig.from_settings(),
        title=f'Search: {query}' if query else 'Search',
        path=request.path,
    )
    return render(request, 'newsroom/search.html', {
        'query': query,
        'articles': articles,
        'page_meta': page_meta,
    })


# =============================================================================
# View tracking API
# =============================================================================


@require_POST
def track_view(request, slug):
    """Schedule the delayed view count for an article page that was just shown."""
    if not Article.objects.published().filter(slug=slug).exists():
        raise Http404("Article not found")
    task_id = ViewTracker(slug).start()
    return JsonResponse({'task_id': task_id})


@require_POST
def cancel_view(request, task_id):
    """Revoke a pending view count when the reader leaves early."""
    return JsonResponse({'cancelled': cancel_view_task(task_id)})


# =============================================================================
# Comments and reactions
# =============================================================================


@require_POST
def add_comment(request, slug):
    article = get_object_or_404(Article.objects.published(), slug=slug)
    form = CommentForm(request.POST, article=article)
    if form.is_valid():
        comment = engagement.add_comment(
            article,
            author_name=form.cleaned_data['author_name'],
            content=form.cleaned_data['content'],
            parent=form.cleaned_data.get('parent'),
            user=request.user,
        )
        if comment.approved:
            messages.success(request, 'Comment added successfully!')
        else:
            messages.success(request, 'Thanks! Your comment will appear once it is approved.')
    else:
        errors = '; '.join(error for field_errors in form.errors.values() for error in field_errors)
        messages.error(request, f'Failed to add comment: {errors}')
    return redirect(f'{article.get_absolute_url()}#comments')


@require_POST
def react(request, slug):
    """Toggle the reader's reaction and return the new counts."""
    article = get_object_or_404(Article.objects.published(), slug=slug)
    try:
        current = engagement.toggle_reaction(
            article, engagement.reader_session_id(request), request.POST.get('type', ''),
        )
    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    return JsonResponse({
        'reactions': engagement.reaction_counts(article),
        'user_reaction': current,
    })


# =============================================================================
# Staff dashboard
# =============================================================================


@_staff_required
def dashboard(request):
    counts = {
        status: Article.objects.filter(status=status).count()
        for status in ArticleStatus.values
    }
    return render(request, 'newsroom/dashboard/index.html', {
        'counts': counts,
        'recent_articles': Article.objects.with_relations().order_by('-updated_at')[:10],
    })


@_staff_required
def dashboard_article_list(request):
    form = ArticleFilterForm(request.GET or None)
    search_term, status_filter, trending_filter = '', STATUS_ALL, None
    if form.is_valid():
        search_term = form.cleaned_data['q'].strip()
        status_filter = form.cleaned_data['status'] or STATUS_ALL
        trending_filter = parse_trending_filter(form.cleaned_data['trending'])

    if form.is_bound and form.errors:
        # Unknown filter values match nothing
        articles = []
    else:
        articles = filter_articles(
            Article.objects.with_relations().order_by('-updated_at'),
            search_term,
            status_filter,
            trending_filter,
        )
    return render(request, 'newsroom/dashboard/article_list.html', {
        'filter_form': form if form.is_bound else ArticleFilterForm(),
        'articles': articles,
    })


def _save_article_form(form, previous_status):
    article = form.save(commit=False)
    became_published = prepare_for_save(article, previous_status)
    article.save()
    form.save_m2m()
    if became_published:
        announce_published(article)
    return article


@_staff_required
def dashboard_article_create(request):
    form = ArticleForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        article = _save_article_form(form, previous_status=None)
        messages.success(request, f'Article "{article.title}" created.')
        logger.info("Article %d created by %s", article.id, request.user.get_username())
        return redirect('newsroom:dashboard_article_edit', pk=article.pk)
    return render(request, 'newsroom/dashboard/article_form.html', {'form': form, 'article': None})


@_staff_required
def dashboard_article_edit(request, pk):
    article = get_object_or_404(Article, pk=pk)
    previous_status = article.status
    form = ArticleForm(request.POST or None, instance=article)
    if request.method == 'POST' and form.is_valid():
        article = _save_article_form(form, previous_status)
        messages.success(request, f'Article "{article.title}" saved.')
        logger.info("Article %d updated by %s", article.id, request.user.get_username())
        return redirect('newsroom:dashboard_article_edit', pk=article.pk)
    return render(request, 'newsroom/dashboard/article_form.html', {'form': form, 'article': article})


@_staff_required
def dashboard_comments(request):
    form = CommentModerationFilterForm(request.GET or None)
    moderation_filter = 'all'
    if form.is_valid():
        moderation_filter = form.cleaned_data['filter'] or 'all'

    comments = Comment.objects.select_related('article').order_by('-created_at')
    counts = {
        'all': comments.count(),
        'approved': comments.filter(approved=True).count(),
        'pending': comments.filter(approved=False).count(),
    }
    if moderation_filter == 'approved':
        comments = comments.filter(approved=True)
    elif moderation_filter == 'pending':
        comments = comments.filter(approved=False)

    return render(request, 'newsroom/dashboard/comments.html', {
        'comments': comments,
        'counts': counts,
        'moderation_filter': moderation_filter,
    })


@_staff_required
@require_POST
def dashboard_comment_moderate(request, pk):
    comment = get_object_or_404(Comment, pk=pk)
    action = request.POST.get('action')
    if action == 'approve':
        engagement.set_comments_approved(Comment.objects.filter(pk=pk), True)
        messages.success(request, 'Comment approved')
    elif action == 'unapprove':
        engagement.set_comments_approved(Comment.objects.filter(pk=pk), False)
        messages.success(request, 'Comment unapproved')
    elif action == 'delete':
        comment.delete()
        messages.success(request, 'Comment deleted')
    else:
        messages.error(request, f'Unknown moderation action: {action}')
    logger.info("Comment %d %s by %s", pk, action, request.user.get_username())
    return redirect('newsroom:dashboard_comments')
