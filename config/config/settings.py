"""
Django settings for the GH News project.

Every deployment-specific value is read from the environment with a
development default, so ``manage.py runserver`` works out of the box.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: bool = False) -> bool:
    return os.environ.get(name, str(default)).strip().lower() in ('1', 'true', 'yes', 'on')


SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'django-insecure-ghnews-development-key')

DEBUG = _env_bool('DEBUG', True)

ALLOWED_HOSTS = [h for h in os.environ.get('ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',') if h]

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'django.contrib.sitemaps',
    'django.contrib.syndication',
    'newsroom',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
                'newsroom.context_processors.seo',
                'newsroom.context_processors.auth_state',
                'newsroom.context_processors.analytics',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.environ.get('DATABASE_PATH', str(BASE_DIR / 'db.sqlite3')),
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
]

LOGIN_URL = '/auth/'
LOGIN_REDIRECT_URL = '/dashboard/'
LOGOUT_REDIRECT_URL = '/'

LANGUAGE_CODE = 'en-gb'
TIME_ZONE = 'Africa/Accra'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

# -----------------------------------------------------------------------------
# Site identity, SEO and analytics
# -----------------------------------------------------------------------------

SITE_URL = os.environ.get('SITE_URL', 'https://ghnewsmedia.com').rstrip('/')

SEO = {
    'title': "GH News - Ghana's Digital News Platform",
    'title_template': '%s',
    'default_title': "GH News - Ghana's Digital News Platform",
    'description': 'Your trusted source for Ghanaian news, politics, sports, and more.',
    'open_graph': {
        'type': 'website',
        'locale': 'en_GH',
        'url': SITE_URL,
        'site_name': 'GH News',
        'images': [
            {
                'url': f'{SITE_URL}/og-image.jpg',
                'width': 1200,
                'height': 630,
                'alt': "GH News - Ghana's Digital News Platform",
            },
        ],
    },
    'twitter': {
        'handle': '@ghnewsmedia',
        'site': '@ghnewsmedia',
        'card_type': 'summary_large_image',
    },
}

GA_MEASUREMENT_ID = os.environ.get('GA_MEASUREMENT_ID', 'G-DQZ3JPQ1XG')

RSS_FEED_LIMIT = 50

# Google News sitemap: only articles published within the window are listed.
NEWS_SITEMAP_WINDOW_HOURS = 48
NEWS_PUBLICATION_NAME = 'GhNewsMedia'
NEWS_PUBLICATION_LANGUAGE = 'en'

# -----------------------------------------------------------------------------
# Reader engagement
# -----------------------------------------------------------------------------

# New comments stay hidden until a moderator approves them.
COMMENTS_REQUIRE_APPROVAL = _env_bool('COMMENTS_REQUIRE_APPROVAL', True)

# -----------------------------------------------------------------------------
# View tracking and search-engine notification
# -----------------------------------------------------------------------------

# Seconds a reader must stay on an article before its view is counted.
VIEW_TRACKING_DELAY = float(os.environ.get('VIEW_TRACKING_DELAY', '3.0'))

GOOGLE_INDEXING_API_URL = 'https://indexing.googleapis.com/v3/urlNotifications:publish'
GOOGLE_INDEXING_TOKEN = os.environ.get('GOOGLE_INDEXING_TOKEN', '')
SITEMAP_PING_URL = os.environ.get('SITEMAP_PING_URL', 'https://www.google.com/ping')
INDEXING_REQUEST_TIMEOUT = 10

# -----------------------------------------------------------------------------
# Celery
# -----------------------------------------------------------------------------

CELERY_BROKER_URL = os.environ.get('CELERY_BROKER_URL', 'redis://localhost:6379/0')
CELERY_RESULT_BACKEND = os.environ.get('CELERY_RESULT_BACKEND', CELERY_BROKER_URL)
CELERY_TASK_ALWAYS_EAGER = _env_bool('CELERY_TASK_ALWAYS_EAGER', False)
CELERY_TASK_SERIALIZER = 'json'
CELERY_ACCEPT_CONTENT = ['json']
CELERY_TIMEZONE = TIME_ZONE

# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} [{levelname}] {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'newsroom': {
            'handlers': ['console'],
            'level': os.environ.get('NEWSROOM_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
        'celery': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': False,
        },
    },
}
