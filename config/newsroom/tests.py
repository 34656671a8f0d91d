"""
Tests for the GH News site.

Covers:
1. Article filter (search, status, trending, ordering)
2. Delayed, cancellable view tracking and the view-count task
3. Keyboard guard for editor forms
4. Auth state and the admin/login header link
5. SEO metadata, robots.txt, sitemaps (including Google News) and RSS
6. Public pages and the view-tracking API
7. Staff dashboard, publishing side effects and search-engine notification
8. Comments, reactions and comment moderation
9. Management commands
"""

from __future__ import annotations

from datetime import timedelta
from io import StringIO
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import requests
from django.contrib.auth.models import User
from django.core.management import CommandError, call_command
from django.db import DatabaseError
from django.template import Context, Template
from django.test import SimpleTestCase, TestCase, override_settings
from django.utils import timezone
from kombu.exceptions import OperationalError

from config.celery import app as celery_app

from . import engagement
from .admin import CommentAdmin
from .auth import AuthKind, AuthState, admin_link
from .filters import filter_articles, parse_trending_filter
from .keyboard import FormSubmissionGuard, KeyEvent
from .models import (
    Article, ArticleStatus, AuthorProfile, Category, Comment, Reaction, Tag, UserRole,
)
from .publishing import set_status
from .seo import SeoConfig, article_page_meta, build_page_meta
from .tracking import ViewTracker, cancel_view_task


def make_record(title, status='published', author=None, trending=False):
    return SimpleNamespace(
        title=title,
        status=status,
        trending=trending,
        author=SimpleNamespace(name=author) if author else None,
    )


def make_article(slug, title=None, status=ArticleStatus.PUBLISHED, **extra):
    if status == ArticleStatus.PUBLISHED:
        extra.setdefault('published_at', timezone.now())
    return Article.objects.create(
        title=title or slug.replace('-', ' ').title(),
        slug=slug,
        content='<p>Body text</p>',
        status=status,
        **extra,
    )


def make_staff_user(username='editor', role=UserRole.EDITOR):
    user = User.objects.create_user(username=username, password='pw-12345-long')
    AuthorProfile.objects.create(user=user, name=username.title(), role=role)
    return user


# =============================================================================
# Article filter
# =============================================================================


class FilterArticlesTest(SimpleTestCase):
    """Tests for ``filter_articles``."""

    def setUp(self):
        self.articles = [
            make_record("Election Results", status='published', author="Ama Mensah"),
            make_record("Budget Draft Leaked", status='draft', author="Kofi Boateng", trending=True),
            make_record("Black Stars Win", status='published', trending=True),
            make_record("Old Festival Recap", status='archived', author="Efua Election"),
        ]

    def test_empty_filters_return_everything(self):
        result = filter_articles(self.articles, '', 'all')
        self.assertEqual(result, self.articles)

    def test_result_is_new_list(self):
        result = filter_articles(self.articles, '', 'all')
        self.assertIsNot(result, self.articles)

    def test_search_is_case_insensitive(self):
        records = [make_record("Election Results")]
        self.assertEqual(filter_articles(records, 'election', 'all'), records)
        self.assertEqual(filter_articles(records, 'ELECTION', 'all'), records)

    def test_search_matches_author_name(self):
        result = filter_articles(self.articles, 'kofi', 'all')
        self.assertEqual([a.title for a in result], ["Budget Draft Leaked"])

    def test_search_without_author_checks_title_only(self):
        result = filter_articles(self.articles, 'mensah', 'all')
        self.assertEqual([a.title for a in result], ["Election Results"])
        self.assertEqual(filter_articles([make_record("Black Stars Win")], 'ama', 'all'), [])

    def test_search_does_not_look_at_other_fields(self):
        record = make_record("Markets Rally")
        record.excerpt = "election"
        self.assertEqual(filter_articles([record], 'election', 'all'), [])

    def test_order_is_preserved(self):
        result = filter_articles(self.articles, 'election', 'all')
        self.assertEqual(
            [a.title for a in result],
            ["Election Results", "Old Festival Recap"],
        )

    def test_status_is_exact(self):
        draft = [make_record("Budget", status='draft')]
        self.assertEqual(filter_articles(draft, '', 'published'), [])
        self.assertEqual(filter_articles(draft, '', 'all'), draft)
        self.assertEqual(filter_articles(draft, '', 'draft'), draft)

    def test_unknown_status_matches_nothing(self):
        self.assertEqual(filter_articles(self.articles, '', 'deleted'), [])

    def test_every_result_satisfies_all_filters(self):
        result = filter_articles(self.articles, 'e', 'published')
        for article in result:
            self.assertIn(article, self.articles)
            self.assertEqual(article.status, 'published')

    def test_trending_filter(self):
        result = filter_articles(self.articles, '', 'all', trending_filter=True)
        self.assertEqual([a.title for a in result], ["Budget Draft Leaked", "Black Stars Win"])
        result = filter_articles(self.articles, '', 'published', trending_filter=False)
        self.assertEqual([a.title for a in result], ["Election Results"])

    def test_input_is_not_mutated(self):
        before = list(self.articles)
        filter_articles(self.articles, 'stars', 'published', trending_filter=True)
        self.assertEqual(self.articles, before)

    def test_parse_trending_filter(self):
        self.assertTrue(parse_trending_filter('true'))
        self.assertFalse(parse_trending_filter('false'))
        self.assertIsNone(parse_trending_filter(''))
        self.assertIsNone(parse_trending_filter(None))


class FilterModelArticlesTest(TestCase):
    """``filter_articles`` works on model instances with a nullable author."""

    def test_filter_model_instances(self):
        author = AuthorProfile.objects.create(name="Ama Mensah")
        with_author = make_article('parliament-sits', author=author)
        make_article('draft-story', status=ArticleStatus.DRAFT)
        anonymous = make_article('ama-festival', title="AMA Festival Opens")

        result = filter_articles(
            Article.objects.with_relations().order_by('slug'), 'ama', 'published',
        )
        self.assertEqual(result, [anonymous, with_author])


# =============================================================================
# View tracking
# =============================================================================


class ViewTrackerTest(SimpleTestCase):
    """Tests for the cancellable view-count scheduling."""

    def setUp(self):
        patcher = patch('newsroom.tracking.increment_article_views')
        self.task = patcher.start()
        self.addCleanup(patcher.stop)
        self.result = MagicMock(id='task-1')
        self.task.apply_async.return_value = self.result

    def test_empty_slug_schedules_nothing(self):
        tracker = ViewTracker('')
        self.assertIsNone(tracker.start())
        self.task.apply_async.assert_not_called()

    def test_start_schedules_one_delayed_call(self):
        tracker = ViewTracker('my-article', delay=3.0)
        self.assertEqual(tracker.start(), 'task-1')
        self.task.apply_async.assert_called_once_with(
            kwargs={'article_slug': 'my-article'},
            countdown=3.0,
        )

    @override_settings(VIEW_TRACKING_DELAY=3.0)
    def test_default_delay_is_three_seconds(self):
        self.assertEqual(ViewTracker('my-article').delay, 3.0)

    def test_start_is_idempotent_per_slug(self):
        tracker = ViewTracker('my-article')
        tracker.start()
        tracker.start()
        self.assertEqual(self.task.apply_async.call_count, 1)

    def test_cancel_before_delay_revokes_call(self):
        tracker = ViewTracker('my-article')
        tracker.start()
        self.assertTrue(tracker.cancel())
        self.result.revoke.assert_called_once_with()
        self.assertFalse(tracker.is_pending)

    def test_cancel_without_pending_call(self):
        self.assertFalse(ViewTracker('my-article').cancel())

    def test_change_slug_cancels_and_reschedules(self):
        tracker = ViewTracker('first')
        tracker.start()
        second = MagicMock(id='task-2')
        self.task.apply_async.return_value = second

        self.assertEqual(tracker.change_slug('second'), 'task-2')
        self.result.revoke.assert_called_once_with()
        self.task.apply_async.assert_called_with(
            kwargs={'article_slug': 'second'},
            countdown=tracker.delay,
        )

    def test_change_to_same_slug_keeps_pending_call(self):
        tracker = ViewTracker('first')
        tracker.start()
        self.assertEqual(tracker.change_slug('first'), 'task-1')
        self.result.revoke.assert_not_called()
        self.assertEqual(self.task.apply_async.call_count, 1)

    def test_broker_failure_is_logged_and_swallowed(self):
        self.task.apply_async.side_effect = OperationalError("broker down")
        with self.assertLogs('newsroom', level='ERROR'):
            self.assertIsNone(ViewTracker('my-article').start())

    def test_cancel_view_task_by_id(self):
        self.assertTrue(cancel_view_task('task-9'))
        self.task.AsyncResult.assert_called_once_with('task-9')
        self.task.AsyncResult.return_value.revoke.assert_called_once_with()

    def test_cancel_view_task_without_id(self):
        self.assertFalse(cancel_view_task(''))
        self.task.AsyncResult.assert_not_called()


class IncrementArticleViewsTaskTest(TestCase):
    """Tests for the ``increment_article_views`` task body."""

    def test_increments_views(self):
        from .tasks import increment_article_views

        article = make_article('my-article', views=4)
        result = increment_article_views('my-article')
        article.refresh_from_db()
        self.assertEqual(article.views, 5)
        self.assertIn('my-article', result)

    def test_unknown_slug(self):
        from .tasks import increment_article_views

        result = increment_article_views('missing')
        self.assertIn('not found', result)

    def test_database_error_is_swallowed(self):
        from .tasks import increment_article_views

        with patch('newsroom.tasks.Article.objects.filter', side_effect=DatabaseError('boom')):
            with self.assertLogs('newsroom', level='ERROR'):
                result = increment_article_views('my-article')
        self.assertIn('not tracked', result)


class ViewTrackingCompletionTest(TestCase):
    """A tracker left to run counts the view exactly once."""

    def setUp(self):
        previous = celery_app.conf.task_always_eager
        celery_app.conf.task_always_eager = True
        self.addCleanup(setattr, celery_app.conf, 'task_always_eager', previous)

    def test_completed_tracking_counts_once(self):
        article = make_article('my-article', views=0)
        tracker = ViewTracker('my-article')

        with patch('newsroom.tasks.Article.objects.filter', wraps=Article.objects.filter) as spy:
            tracker.start()
            tracker.start()

        spy.assert_called_once_with(slug='my-article')
        article.refresh_from_db()
        self.assertEqual(article.views, 1)


# =============================================================================
# Keyboard guard
# =============================================================================


class FormSubmissionGuardTest(SimpleTestCase):

    def setUp(self):
        self.guard = FormSubmissionGuard()

    def test_ctrl_key_down_is_suppressed(self):
        event = KeyEvent(key='b', ctrl_key=True)
        self.assertFalse(self.guard.handle_key_down(event))
        self.assertTrue(event.default_prevented)
        self.assertTrue(event.propagation_stopped)

    def test_meta_enter_is_suppressed(self):
        event = KeyEvent(key='Enter', meta_key=True)
        self.assertFalse(self.guard.handle_key_down(event))
        self.assertTrue(event.default_prevented)

    def test_plain_key_is_allowed(self):
        event = KeyEvent(key='Enter')
        self.assertTrue(self.guard.handle_key_down(event))
        self.assertFalse(event.default_prevented)
        self.assertFalse(event.propagation_stopped)

    def test_shift_alone_is_allowed(self):
        self.assertTrue(self.guard.handle_key_down(KeyEvent(key='A', shift_key=True)))

    def test_key_press_handler(self):
        self.assertFalse(self.guard.handle_key_press(KeyEvent(key='i', meta_key=True)))
        self.assertTrue(self.guard.handle_key_press(KeyEvent(key='i')))

    def test_form_props(self):
        props = self.guard.form_props()
        self.assertEqual(set(props), {'on_key_down', 'on_key_press'})
        self.assertFalse(props['on_key_down'](KeyEvent(ctrl_key=True)))


# =============================================================================
# Auth state and header link
# =============================================================================


class AuthStateTest(TestCase):

    def test_anonymous(self):
        self.assertEqual(AuthState.from_user(None).kind, AuthKind.UNAUTHENTICATED)

    def test_user_without_profile(self):
        user = User.objects.create_user(username='reader', password='x')
        state = AuthState.from_user(user)
        self.assertEqual(state.kind, AuthKind.AUTHENTICATED)
        self.assertIsNone(state.role)

    def test_editor_is_admin(self):
        self.assertTrue(AuthState.from_user(make_staff_user(role=UserRole.EDITOR)).is_admin)

    def test_moderator_is_not_admin(self):
        state = AuthState.from_user(make_staff_user('mod', role=UserRole.MODERATOR))
        self.assertEqual(state.kind, AuthKind.AUTHENTICATED)

    def test_superuser_is_admin(self):
        user = User.objects.create_superuser(username='root', password='x', email='r@example.com')
        self.assertTrue(AuthState.from_user(user).is_admin)


class AdminLinkTest(SimpleTestCase):

    def test_unauthenticated_gets_login(self):
        link = admin_link(AuthState.anonymous())
        self.assertEqual(link.label, 'Admin Login')
        self.assertEqual(link.url, '/auth/')

    def test_missing_state_gets_login(self):
        self.assertEqual(admin_link(None).label, 'Admin Login')

    def test_non_admin_gets_login(self):
        link = admin_link(AuthState(kind=AuthKind.AUTHENTICATED, username='reader'))
        self.assertEqual(link.url, '/auth/')

    def test_admin_gets_dashboard(self):
        link = admin_link(AuthState(kind=AuthKind.ADMIN, username='ed', role='editor'))
        self.assertEqual(link.label, 'Admin Dashboard')
        self.assertEqual(link.url, '/dashboard/')

    def test_template_tags(self):
        rendered = Template(
            "{% load newsroom_tags %}{% admin_link state %}{% article_tags tags %}"
        ).render(Context({
            'state': AuthState(kind=AuthKind.ADMIN),
            'tags': ['politics', 'ghana'],
        }))
        self.assertIn('Admin Dashboard', rendered)
        self.assertIn('#politics', rendered)
        self.assertIn('#ghana', rendered)


# =============================================================================
# SEO and crawler endpoints
# =============================================================================


SEO_FIXTURE = {
    'title': 'GH News',
    'title_template': '%s | GH News',
    'default_title': 'GH News - Home',
    'description': 'Default description',
    'open_graph': {
        'type': 'website',
        'locale': 'en_GH',
        'url': 'https://example.com/',
        'site_name': 'GH News',
        'images': [{'url': 'https://example.com/og.jpg', 'width': 1200, 'height': 630, 'alt': 'GH'}],
    },
    'twitter': {'handle': '@gh', 'site': '@gh', 'card_type': 'summary_large_image'},
}


class SeoTest(TestCase):

    def setUp(self):
        self.config = SeoConfig.from_dict(SEO_FIXTURE)

    def test_config_from_dict(self):
        self.assertEqual(self.config.site_url, 'https://example.com')
        self.assertEqual(self.config.images[0].width, 1200)
        self.assertEqual(self.config.twitter_handle, '@gh')

    def test_defaults_without_page_values(self):
        meta = build_page_meta(self.config)
        self.assertEqual(meta.title, 'GH News - Home')
        self.assertEqual(meta.description, 'Default description')
        self.assertEqual(meta.canonical_url, 'https://example.com')

    def test_title_template_and_canonical(self):
        meta = build_page_meta(self.config, title='Sports', path='category/sports/')
        self.assertEqual(meta.title, 'Sports | GH News')
        self.assertEqual(meta.canonical_url, 'https://example.com/category/sports/')

    def test_article_overrides(self):
        article = make_article(
            'budget-2025',
            title='Budget 2025',
            meta_title='Budget 2025 explained',
            meta_description='What the budget means',
            keywords=['budget', 'economy'],
            featured_image='https://cdn.example.com/budget.jpg',
        )
        meta = article_page_meta(article, self.config)
        self.assertEqual(meta.title, 'Budget 2025 explained | GH News')
        self.assertEqual(meta.description, 'What the budget means')
        self.assertEqual(meta.og_type, 'article')
        self.assertEqual(meta.images[0].url, 'https://cdn.example.com/budget.jpg')
        self.assertEqual(meta.keywords_content, 'budget, economy')
        self.assertTrue(meta.canonical_url.endswith('/news/budget-2025/'))


class CrawlerEndpointTest(TestCase):

    def setUp(self):
        self.published = make_article('published-story', title='Published Story')
        self.draft = make_article('draft-story', title='Draft Story', status=ArticleStatus.DRAFT)

    def test_robots_txt(self):
        response = self.client.get('/robots.txt')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'text/plain')
        self.assertEqual(
            response['Cache-Control'], 'public, s-maxage=86400, stale-while-revalidate',
        )
        body = response.content.decode()
        self.assertIn('User-agent: *', body)
        self.assertIn('Disallow: /admin/', body)
        self.assertIn('/sitemap.xml', body)
        self.assertIn('/news-sitemap.xml', body)

    def test_robots_txt_rejects_post(self):
        self.assertEqual(self.client.post('/robots.txt').status_code, 405)

    def test_sitemap_lists_published_articles_only(self):
        for url in ('/sitemap.xml', '/api/sitemap.xml'):
            body = self.client.get(url).content.decode()
            self.assertIn('/news/published-story/', body)
            self.assertNotIn('/news/draft-story/', body)

    def test_rss_feed(self):
        response = self.client.get('/rss.xml')
        self.assertEqual(response.status_code, 200)
        body = response.content.decode()
        self.assertIn('Published Story', body)
        self.assertNotIn('Draft Story', body)
        self.assertEqual(self.client.get('/api/rss.xml').status_code, 200)


class NewsSitemapTest(TestCase):

    def test_lists_articles_from_last_two_days(self):
        recent = make_article('fresh-story', title='Tom & Jerry Return')
        recent.tags.add(Tag.objects.create(name='cartoons', slug='cartoons'))
        make_article('old-story', published_at=timezone.now() - timedelta(hours=72))
        make_article('draft-story', status=ArticleStatus.DRAFT)

        response = self.client.get('/news-sitemap.xml')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'application/xml')
        self.assertEqual(
            response['Cache-Control'], 'public, s-maxage=1800, stale-while-revalidate=3600',
        )
        body = response.content.decode()
        self.assertIn('/news/fresh-story/', body)
        self.assertNotIn('/news/old-story/', body)
        self.assertNotIn('/news/draft-story/', body)
        self.assertIn('<news:title>Tom &amp; Jerry Return</news:title>', body)
        self.assertIn('<news:keywords>cartoons</news:keywords>', body)
        self.assertIn('<news:name>GhNewsMedia</news:name>', body)

    @override_settings(NEWS_SITEMAP_WINDOW_HOURS=1)
    def test_window_is_configurable(self):
        make_article('two-hours-old', published_at=timezone.now() - timedelta(hours=2))
        self.assertNotIn('/news/two-hours-old/', self.client.get('/news-sitemap.xml').content.decode())


# =============================================================================
# Public pages and view-tracking API
# =============================================================================


class PublicPagesTest(TestCase):

    def setUp(self):
        self.category = Category.objects.create(name='Politics', slug='politics', color='#b91c1c')
        self.author = AuthorProfile.objects.create(name='Ama Mensah', bio='Political correspondent')
        self.article = make_article(
            'election-results',
            title='Election Results',
            category=self.category,
            author=self.author,
        )
        self.article.tags.add(Tag.objects.create(name='elections', slug='elections'))
        make_article('hidden-draft', title='Hidden Draft', status=ArticleStatus.DRAFT)

    def test_home(self):
        response = self.client.get('/')
        self.assertContains(response, 'Election Results')
        self.assertNotContains(response, 'Hidden Draft')
        self.assertContains(response, 'Admin Login')

    def test_article_detail(self):
        response = self.client.get('/news/election-results/')
        self.assertContains(response, 'Election Results')
        self.assertContains(response, '#elections')
        self.assertContains(response, '/api/views/election-results/')
        self.assertContains(response, 'googletagmanager.com/gtag/js')
        self.assertContains(response, 'property="og:type" content="article"')

    def test_leaving_page_cancels_in_flight_tracking(self):
        response = self.client.get('/news/election-results/')
        # The cancel waits on the scheduling request instead of a task id
        # that may not have arrived yet.
        self.assertContains(response, 'pending = post(trackUrl)')
        self.assertContains(response, 'pending.then(function (taskId)')

    def test_draft_is_not_public(self):
        self.assertEqual(self.client.get('/news/hidden-draft/').status_code, 404)

    def test_category_article_url(self):
        self.assertEqual(self.client.get('/politics/election-results/').status_code, 200)
        self.assertEqual(self.client.get('/sports/election-results/').status_code, 404)

    def test_category_pages(self):
        self.assertContains(self.client.get('/category/politics/'), 'Election Results')
        self.assertContains(self.client.get('/politics/'), 'Election Results')

    def test_author_page(self):
        self.assertContains(self.client.get(f'/author/{self.author.pk}/'), 'Election Results')

    def test_search_by_author_name(self):
        response = self.client.get('/search/', {'q': 'mensah'})
        self.assertContains(response, 'Election Results')
        self.assertEqual(len(response.context['articles']), 1)

    def test_search_excludes_drafts(self):
        response = self.client.get('/search/', {'q': 'hidden'})
        self.assertEqual(response.context['articles'], [])

    def test_staff_sees_dashboard_link(self):
        self.client.force_login(make_staff_user())
        self.assertContains(self.client.get('/'), 'Admin Dashboard')


class ViewTrackingApiTest(TestCase):

    @patch('newsroom.tracking.increment_article_views')
    def test_track_view(self, mock_task):
        make_article('my-article')
        mock_task.apply_async.return_value = MagicMock(id='abc')
        response = self.client.post('/api/views/my-article/')
        self.assertEqual(response.json(), {'task_id': 'abc'})
        mock_task.apply_async.assert_called_once_with(
            kwargs={'article_slug': 'my-article'},
            countdown=ViewTracker('my-article').delay,
        )

    @patch('newsroom.tracking.increment_article_views')
    def test_draft_is_not_tracked(self, mock_task):
        make_article('secret-draft', status=ArticleStatus.DRAFT)
        response = self.client.post('/api/views/secret-draft/')
        self.assertEqual(response.status_code, 404)
        mock_task.apply_async.assert_not_called()

    @patch('newsroom.tracking.increment_article_views')
    def test_unknown_slug_is_not_tracked(self, mock_task):
        response = self.client.post('/api/views/no-such-article/')
        self.assertEqual(response.status_code, 404)
        mock_task.apply_async.assert_not_called()

    @patch('newsroom.tracking.increment_article_views')
    def test_cancel_view(self, mock_task):
        response = self.client.post('/api/views/cancel/abc/')
        self.assertEqual(response.json(), {'cancelled': True})
        mock_task.AsyncResult.assert_called_once_with('abc')

    def test_track_view_requires_post(self):
        self.assertEqual(self.client.get('/api/views/my-article/').status_code, 405)


# =============================================================================
# Dashboard, publishing and search-engine notification
# =============================================================================


class DashboardTest(TestCase):

    def setUp(self):
        self.author = AuthorProfile.objects.create(name='Kofi Boateng')
        make_article('budget-draft', title='Budget Draft', status=ArticleStatus.DRAFT, author=self.author)
        make_article('stars-win', title='Black Stars Win', trending=True)
        make_article('festival-recap', title='Festival Recap', status=ArticleStatus.ARCHIVED)

    def test_anonymous_is_sent_to_login(self):
        response = self.client.get('/dashboard/')
        self.assertRedirects(response, '/auth/?next=/dashboard/', fetch_redirect_response=False)

    def test_moderator_is_sent_to_login(self):
        self.client.force_login(make_staff_user('mod', role=UserRole.MODERATOR))
        self.assertEqual(self.client.get('/dashboard/').status_code, 302)

    def test_editor_sees_dashboard(self):
        self.client.force_login(make_staff_user())
        response = self.client.get('/dashboard/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['counts']['draft'], 1)

    def test_article_list_filters(self):
        self.client.force_login(make_staff_user())
        response = self.client.get('/dashboard/articles/', {'q': 'kofi', 'status': 'draft'})
        self.assertEqual([a.slug for a in response.context['articles']], ['budget-draft'])

        response = self.client.get('/dashboard/articles/', {'status': 'all', 'trending': 'true'})
        self.assertEqual([a.slug for a in response.context['articles']], ['stars-win'])

        response = self.client.get('/dashboard/articles/')
        self.assertEqual(len(response.context['articles']), 3)

    def test_unknown_status_lists_nothing(self):
        self.client.force_login(make_staff_user())
        response = self.client.get('/dashboard/articles/', {'status': 'deleted'})
        self.assertEqual(response.context['articles'], [])
        self.assertContains(response, 'form-error')

    def test_editor_form_is_guarded(self):
        self.client.force_login(make_staff_user())
        response = self.client.get('/dashboard/articles/new/')
        self.assertContains(response, 'data-submit-guard="modifier-keys"')

    @patch('newsroom.tasks.notify_search_engines')
    def test_create_published_article(self, mock_notify):
        self.client.force_login(make_staff_user())
        response = self.client.post('/dashboard/articles/new/', {
            'title': 'Fresh Story',
            'slug': 'fresh-story',
            'content': '<p>Fresh</p>',
            'status': 'published',
            'read_time': 3,
            'keywords': 'fresh, news',
        })
        article = Article.objects.get(slug='fresh-story')
        self.assertRedirects(
            response, f'/dashboard/articles/{article.pk}/edit/', fetch_redirect_response=False,
        )
        self.assertIsNotNone(article.published_at)
        self.assertEqual(article.keywords, ['fresh', 'news'])
        mock_notify.delay.assert_called_once_with(article.id)

    @patch('newsroom.tasks.notify_search_engines')
    def test_saving_draft_does_not_notify(self, mock_notify):
        self.client.force_login(make_staff_user())
        article = Article.objects.get(slug='budget-draft')
        self.client.post(f'/dashboard/articles/{article.pk}/edit/', {
            'title': 'Budget Draft v2',
            'slug': 'budget-draft',
            'content': '<p>Updated</p>',
            'status': 'draft',
            'read_time': 5,
        })
        article.refresh_from_db()
        self.assertEqual(article.title, 'Budget Draft v2')
        self.assertIsNone(article.published_at)
        mock_notify.delay.assert_not_called()


class PublishingTest(TestCase):

    @patch('newsroom.tasks.notify_search_engines')
    def test_set_status_publishes_and_announces(self, mock_notify):
        draft = make_article('a-draft', status=ArticleStatus.DRAFT)
        make_article('already-live')

        changed = set_status(Article.objects.all(), ArticleStatus.PUBLISHED)

        self.assertEqual(changed, 1)
        draft.refresh_from_db()
        self.assertEqual(draft.status, ArticleStatus.PUBLISHED)
        self.assertIsNotNone(draft.published_at)
        mock_notify.delay.assert_called_once_with(draft.id)

    @patch('newsroom.tasks.notify_search_engines')
    def test_republishing_keeps_original_date(self, mock_notify):
        original = timezone.now() - timedelta(days=3)
        article = make_article('archived-one', status=ArticleStatus.ARCHIVED, published_at=original)

        set_status([article], ArticleStatus.PUBLISHED)

        article.refresh_from_db()
        self.assertEqual(article.published_at, original)

    @patch('newsroom.tasks.notify_search_engines')
    def test_broker_failure_does_not_block_publishing(self, mock_notify):
        mock_notify.delay.side_effect = OperationalError("broker down")
        article = make_article('needs-publish', status=ArticleStatus.DRAFT)
        with self.assertLogs('newsroom', level='ERROR'):
            set_status([article], ArticleStatus.PUBLISHED)
        article.refresh_from_db()
        self.assertTrue(article.is_published)


class SearchIndexingServiceTest(SimpleTestCase):

    def make_service(self, token=''):
        from .services.indexing_service import SearchIndexingService

        service = SearchIndexingService(token=token, site_url='https://example.com')
        service.session = MagicMock()
        return service

    def test_without_token_pings_sitemap(self):
        service = self.make_service()
        self.assertTrue(service.notify_article_published('https://example.com/news/a/'))
        service.session.post.assert_not_called()
        service.session.get.assert_called_once()
        self.assertEqual(
            service.session.get.call_args.kwargs['params'],
            {'sitemap': 'https://example.com/sitemap.xml'},
        )

    def test_with_token_submits_url(self):
        service = self.make_service(token='secret')
        self.assertTrue(service.notify_article_published('https://example.com/news/a/'))
        self.assertEqual(
            service.session.post.call_args.kwargs['json'],
            {'url': 'https://example.com/news/a/', 'type': 'URL_UPDATED'},
        )
        service.session.get.assert_not_called()

    def test_api_failure_falls_back_to_ping(self):
        service = self.make_service(token='secret')
        service.session.post.side_effect = requests.ConnectionError('down')
        self.assertTrue(service.notify_article_published('https://example.com/news/a/'))
        service.session.get.assert_called_once()

    def test_total_failure_returns_false(self):
        service = self.make_service()
        service.session.get.return_value.raise_for_status.side_effect = requests.HTTPError('410')
        self.assertFalse(service.notify_article_published('https://example.com/news/a/'))


class NotifySearchEnginesTaskTest(TestCase):

    def test_unknown_article(self):
        from .tasks import notify_search_engines

        self.assertIn('not found', notify_search_engines(99999))

    def test_unpublished_article_is_skipped(self):
        from .tasks import notify_search_engines

        article = make_article('not-yet', status=ArticleStatus.DRAFT)
        self.assertIn('not published', notify_search_engines(article.id))

    @patch('newsroom.services.indexing_service.SearchIndexingService.notify_article_published')
    def test_published_article(self, mock_notify):
        from .tasks import notify_search_engines

        mock_notify.return_value = True
        article = make_article('live-story')
        result = notify_search_engines(article.id)
        self.assertIn('Notified', result)
        mock_notify.assert_called_once_with(article.absolute_site_url)


# =============================================================================
# Comments and reactions
# =============================================================================


class CommentsTest(TestCase):

    def setUp(self):
        self.article = make_article('election-results', title='Election Results')
        self.url = '/news/election-results/comments/'

    def test_new_comment_waits_for_approval(self):
        response = self.client.post(self.url, {'author_name': 'Yaw', 'content': 'Great coverage'})
        self.assertRedirects(
            response, '/news/election-results/#comments', fetch_redirect_response=False,
        )
        comment = Comment.objects.get(article=self.article)
        self.assertFalse(comment.approved)
        self.assertNotContains(self.client.get('/news/election-results/'), 'Great coverage')

    @override_settings(COMMENTS_REQUIRE_APPROVAL=False)
    def test_comment_visible_without_moderation(self):
        self.client.post(self.url, {'author_name': 'Yaw', 'content': 'Great coverage'})
        response = self.client.get('/news/election-results/')
        self.assertContains(response, 'Great coverage')
        self.assertContains(response, 'Comment added successfully!')

    def test_reply_is_threaded(self):
        parent = Comment.objects.create(
            article=self.article, author_name='Ama', content='First', approved=True,
        )
        self.client.post(self.url, {
            'author_name': 'Kofi', 'content': 'Replying', 'parent': parent.pk,
        })
        reply = Comment.objects.get(author_name='Kofi')
        self.assertEqual(reply.parent, parent)

        Comment.objects.filter(pk=reply.pk).update(approved=True)
        threads = engagement.comment_threads(self.article)
        self.assertEqual([t.comment for t in threads], [parent])
        self.assertEqual([t.comment for t in threads[0].replies], [reply])
        self.assertEqual(threads[0].replies_count, 1)

    def test_unapproved_comments_and_their_replies_are_hidden(self):
        pending = Comment.objects.create(article=self.article, author_name='A', content='x')
        Comment.objects.create(
            article=self.article, parent=pending, author_name='B', content='y', approved=True,
        )
        self.assertEqual(engagement.comment_threads(self.article), [])

    def test_reply_to_other_article_is_rejected(self):
        other = make_article('other-story')
        foreign = Comment.objects.create(article=other, author_name='A', content='x', approved=True)
        self.client.post(self.url, {'author_name': 'B', 'content': 'y', 'parent': foreign.pk})
        self.assertFalse(Comment.objects.filter(article=self.article).exists())
        with self.assertRaises(ValueError):
            engagement.add_comment(self.article, 'B', 'y', parent=foreign)

    def test_blank_comment_is_rejected(self):
        response = self.client.post(self.url, {'author_name': 'Yaw', 'content': '   '}, follow=True)
        self.assertFalse(Comment.objects.exists())
        self.assertContains(response, 'Failed to add comment')

    def test_draft_article_takes_no_comments(self):
        make_article('hidden', status=ArticleStatus.DRAFT)
        response = self.client.post('/news/hidden/comments/', {'author_name': 'A', 'content': 'x'})
        self.assertEqual(response.status_code, 404)

    def test_comments_require_post(self):
        self.assertEqual(self.client.get(self.url).status_code, 405)


class ReactionsTest(TestCase):

    def setUp(self):
        self.article = make_article('black-stars-win', title='Black Stars Win')
        self.url = '/api/reactions/black-stars-win/'

    def react(self, reaction_type, client=None):
        return (client or self.client).post(self.url, {'type': reaction_type})

    def test_add_reaction(self):
        data = self.react('like').json()
        self.assertEqual(data['user_reaction'], 'like')
        self.assertEqual(data['reactions'], {'likes': 1, 'hearts': 0, 'laughs': 0, 'angry': 0})

    def test_same_reaction_again_removes_it(self):
        self.react('like')
        data = self.react('like').json()
        self.assertIsNone(data['user_reaction'])
        self.assertEqual(data['reactions']['likes'], 0)
        self.assertFalse(Reaction.objects.exists())

    def test_other_reaction_replaces_it(self):
        self.react('like')
        data = self.react('heart').json()
        self.assertEqual(data['user_reaction'], 'heart')
        self.assertEqual(data['reactions']['likes'], 0)
        self.assertEqual(data['reactions']['hearts'], 1)
        self.assertEqual(Reaction.objects.count(), 1)

    def test_sessions_count_separately(self):
        self.react('laugh')
        data = self.react('laugh', client=self.client_class()).json()
        self.assertEqual(data['reactions']['laughs'], 2)

    def test_article_page_shows_reader_reaction(self):
        self.react('angry')
        response = self.client.get('/news/black-stars-win/')
        self.assertEqual(response.context['user_reaction'], 'angry')
        self.assertIn(('angry', 'Angry', 1), response.context['reaction_buttons'])

    def test_unknown_type_is_rejected(self):
        self.assertEqual(self.react('meh').status_code, 400)
        self.assertFalse(Reaction.objects.exists())

    def test_draft_article_takes_no_reactions(self):
        make_article('hidden', status=ArticleStatus.DRAFT)
        response = self.client.post('/api/reactions/hidden/', {'type': 'like'})
        self.assertEqual(response.status_code, 404)


class CommentModerationTest(TestCase):

    def setUp(self):
        self.article = make_article('election-results')
        self.pending = Comment.objects.create(article=self.article, author_name='A', content='pending one')
        self.approved = Comment.objects.create(
            article=self.article, author_name='B', content='approved one', approved=True,
        )

    def test_requires_staff(self):
        self.assertEqual(self.client.get('/dashboard/comments/').status_code, 302)
        self.client.force_login(make_staff_user('mod', role=UserRole.MODERATOR))
        self.assertEqual(self.client.get('/dashboard/comments/').status_code, 302)

    def test_filter_pending(self):
        self.client.force_login(make_staff_user())
        response = self.client.get('/dashboard/comments/', {'filter': 'pending'})
        self.assertEqual(list(response.context['comments']), [self.pending])
        self.assertEqual(response.context['counts'], {'all': 2, 'approved': 1, 'pending': 1})

    def test_approve_unapprove_delete(self):
        self.client.force_login(make_staff_user())
        url = f'/dashboard/comments/{self.pending.pk}/'

        self.client.post(url, {'action': 'approve'})
        self.pending.refresh_from_db()
        self.assertTrue(self.pending.approved)

        self.client.post(url, {'action': 'unapprove'})
        self.pending.refresh_from_db()
        self.assertFalse(self.pending.approved)

        response = self.client.post(url, {'action': 'delete'})
        self.assertRedirects(response, '/dashboard/comments/', fetch_redirect_response=False)
        self.assertFalse(Comment.objects.filter(pk=self.pending.pk).exists())

    def test_admin_approve_action(self):
        from django.contrib import admin

        model_admin = CommentAdmin(Comment, admin.site)
        with patch.object(model_admin, 'message_user') as mock_message:
            model_admin.approve(None, Comment.objects.all())
        self.pending.refresh_from_db()
        self.assertTrue(self.pending.approved)
        mock_message.assert_called_once_with(None, "Approved 2 comment(s).")


# =============================================================================
# Management commands
# =============================================================================


class CreateStaffUserCommandTest(TestCase):

    def test_creates_user_and_profile(self):
        call_command(
            'create_staff_user',
            email='Ama@ghnewsmedia.com',
            password='a-long-password',
            name='Ama Mensah',
            role='editor',
            title='Reporter',
            stdout=StringIO(),
        )
        user = User.objects.get(username='ama@ghnewsmedia.com')
        self.assertTrue(user.check_password('a-long-password'))
        self.assertTrue(user.is_staff)
        self.assertEqual(user.author_profile.role, UserRole.EDITOR)
        self.assertTrue(AuthState.from_user(user).is_admin)

    def test_duplicate_user_fails(self):
        User.objects.create_user(username='dup@ghnewsmedia.com', password='x')
        with self.assertRaises(CommandError):
            call_command(
                'create_staff_user',
                email='dup@ghnewsmedia.com',
                password='x',
                name='Dup',
                stdout=StringIO(),
            )
