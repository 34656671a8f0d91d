from django.contrib.sitemaps import Sitemap
from django.urls import reverse

from .models import Article


class HomeSitemap(Sitemap):
    changefreq = 'daily'
    priority = 1.0

    def items(self):
        return ['newsroom:home']

    def location(self, item):
        return reverse(item)


class ArticleSitemap(Sitemap):
    changefreq = 'weekly'
    priority = 0.8

    def items(self):
        return Article.objects.published().order_by('-published_at')

    def lastmod(self, article):
        return article.updated_at


SITEMAPS = {
    'home': HomeSitemap,
    'articles': ArticleSitemap,
}
