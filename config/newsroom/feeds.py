"""RSS 2.0 feed of the newest published articles."""

from django.conf import settings
from django.contrib.syndication.views import Feed
from django.utils.html import strip_tags

from .models import Article

# Characters of body text used when an article has no excerpt.
_DESCRIPTION_LENGTH = 500


class LatestArticlesFeed(Feed):
    title = "GhNewsMedia - Ghana's Premier Digital News Platform"
    link = '/'
    description = (
        "Stay informed with Ghana's leading digital news platform. Get breaking news, "
        "politics, business, sports, and entertainment updates from trusted journalists across Ghana."
    )
    language = 'en-GB'
    categories = ('News', 'Ghana', 'Africa')

    def items(self):
        limit = getattr(settings, 'RSS_FEED_LIMIT', 50)
        return (
            Article.objects.published()
            .with_relations()
            .order_by('-published_at')[:limit]
        )

    def item_title(self, item):
        return item.title

    def item_description(self, item):
        if item.excerpt:
            return item.excerpt
        text = strip_tags(item.content)[:_DESCRIPTION_LENGTH]
        return f"{text}..."

    def item_link(self, item):
        return item.get_absolute_url()

    def item_author_name(self, item):
        return item.author.name if item.author else None

    def item_pubdate(self, item):
        return item.published_at

    def item_updateddate(self, item):
        return item.updated_at

    def item_categories(self, item):
        names = [item.category.name] if item.category else []
        return names + item.tag_names
