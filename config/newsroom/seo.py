"""
Site-wide SEO defaults and per-page head metadata.

``settings.SEO`` holds the static defaults (title template, description,
Open Graph card, Twitter handles). Pages build a ``PageMeta`` from it, which
``includes/seo_head.html`` turns into ``<title>``/``<meta>``/``<link>`` tags.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from django.conf import settings
from django.utils.html import strip_tags
from django.utils.text import Truncator


@dataclass(frozen=True)
class OpenGraphImage:
    url: str
    width: Optional[int] = None
    height: Optional[int] = None
    alt: str = ''


@dataclass(frozen=True)
class SeoConfig:
    title: str
    title_template: str
    default_title: str
    description: str
    site_url: str
    site_name: str = ''
    og_type: str = 'website'
    locale: str = ''
    images: tuple[OpenGraphImage, ...] = ()
    twitter_handle: str = ''
    twitter_site: str = ''
    twitter_card_type: str = 'summary_large_image'

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'SeoConfig':
        open_graph = data.get('open_graph', {})
        twitter = data.get('twitter', {})
        images = tuple(
            OpenGraphImage(
                url=image['url'],
                width=image.get('width'),
                height=image.get('height'),
                alt=image.get('alt', ''),
            )
            for image in open_graph.get('images', [])
        )
        return cls(
            title=data.get('title', ''),
            title_template=data.get('title_template', '%s'),
            default_title=data.get('default_title', data.get('title', '')),
            description=data.get('description', ''),
            site_url=open_graph.get('url', '').rstrip('/'),
            site_name=open_graph.get('site_name', ''),
            og_type=open_graph.get('type', 'website'),
            locale=open_graph.get('locale', ''),
            images=images,
            twitter_handle=twitter.get('handle', ''),
            twitter_site=twitter.get('site', ''),
            twitter_card_type=twitter.get('card_type', 'summary_large_image'),
        )

    @classmethod
    def from_settings(cls) -> 'SeoConfig':
        return cls.from_dict(settings.SEO)


@dataclass(frozen=True)
class PageMeta:
    title: str
    description: str
    canonical_url: str
    og_type: str
    images: tuple[OpenGraphImage, ...]
    site_name: str = ''
    locale: str = ''
    twitter_handle: str = ''
    twitter_site: str = ''
    twitter_card_type: str = ''
    keywords: tuple[str, ...] = field(default_factory=tuple)

    @property
    def keywords_content(self) -> str:
        return ', '.join(self.keywords)


def build_page_meta(
    config: SeoConfig,
    title: Optional[str] = None,
    description: Optional[str] = None,
    path: str = '',
    image: Optional[str] = None,
    og_type: Optional[str] = None,
    keywords: tuple[str, ...] = (),
) -> PageMeta:
    """
    Merge page-specific values over the site defaults.

    A page title goes through ``title_template``; without one the
    ``default_title`` is used as-is. ``path`` is joined to the site URL to
    form the canonical URL.
    """
    if title:
        full_title = config.title_template.replace('%s', title)
    else:
        full_title = config.default_title

    if path and not path.startswith('/'):
        path = f'/{path}'

    images = (OpenGraphImage(url=image, alt=title or ''),) if image else config.images

    return PageMeta(
        title=full_title,
        description=description or config.description,
        canonical_url=f'{config.site_url}{path}',
        og_type=og_type or config.og_type,
        images=images,
        site_name=config.site_name,
        locale=config.locale,
        twitter_handle=config.twitter_handle,
        twitter_site=config.twitter_site,
        twitter_card_type=config.twitter_card_type,
        keywords=tuple(keywords),
    )


def article_page_meta(article: Any, config: Optional[SeoConfig] = None) -> PageMeta:
    """Head metadata for an article page, honouring its SEO overrides."""
    config = config or SeoConfig.from_settings()
    description = (
        article.meta_description
        or article.excerpt
        or Truncator(strip_tags(article.content)).chars(160)
    )
    return build_page_meta(
        config,
        title=article.meta_title or article.title,
        description=description,
        path=article.get_absolute_url(),
        image=article.featured_image or None,
        og_type='article',
        keywords=tuple(article.keywords or ()),
    )
