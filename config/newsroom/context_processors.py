"""Template context shared by every page rendered through ``base.html``."""

from django.conf import settings

from .auth import AuthState
from .seo import SeoConfig, build_page_meta


def seo(request):
    """Site-default head metadata; views override it with their own ``page_meta``."""
    config = SeoConfig.from_settings()
    return {
        'seo_config': config,
        'page_meta': build_page_meta(config, path=request.path),
    }


def auth_state(request):
    return {'auth_state': AuthState.from_user(getattr(request, 'user', None))}


def analytics(request):
    return {'ga_measurement_id': getattr(settings, 'GA_MEASUREMENT_ID', '')}
