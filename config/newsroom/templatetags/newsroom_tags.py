from django import template
from django.utils.html import format_html_join

from ..auth import admin_link as build_admin_link
from ..keyboard import guarded_form_attrs

register = template.Library()


@register.inclusion_tag('newsroom/includes/admin_link.html')
def admin_link(auth_state):
    """Login or dashboard button for the header, chosen by ``auth_state``."""
    return {'link': build_admin_link(auth_state)}


@register.inclusion_tag('newsroom/includes/article_tags.html')
def article_tags(tags):
    return {'tags': list(tags)}


@register.simple_tag
def submit_guard_attrs():
    """Attributes that make the editor form ignore Ctrl/Cmd shortcuts."""
    return format_html_join(' ', '{}="{}"', guarded_form_attrs().items())
