from django.contrib import admin
from django.contrib.auth import views as auth_views
from django.contrib.sitemaps.views import sitemap
from django.urls import include, path

from newsroom import views
from newsroom.feeds import LatestArticlesFeed
from newsroom.sitemaps import SITEMAPS

urlpatterns = [
    path('admin/', admin.site.urls),
    path('auth/', auth_views.LoginView.as_view(), name='login'),
    path('auth/logout/', auth_views.LogoutView.as_view(), name='logout'),
    path('robots.txt', views.robots_txt, name='robots_txt'),
    # Public crawler URLs and the internal handlers they resolve to
    path('sitemap.xml', sitemap, {'sitemaps': SITEMAPS}, name='sitemap'),
    path('rss.xml', LatestArticlesFeed(), name='rss'),
    path('news-sitemap.xml', views.news_sitemap, name='news_sitemap'),
    path('api/sitemap.xml', sitemap, {'sitemaps': SITEMAPS}, name='api_sitemap'),
    path('api/rss.xml', LatestArticlesFeed(), name='api_rss'),
    # Category-style URLs are catch-alls, keep the app last
    path('', include('newsroom.urls')),
]
