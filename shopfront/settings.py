import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get('SHOPFRONT_SECRET_KEY', 'django-insecure-shopfront-dev-key')

DEBUG = os.environ.get('SHOPFRONT_DEBUG', '1') == '1'

ALLOWED_HOSTS = [h for h in os.environ.get('SHOPFRONT_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',') if h]


INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'import_export',
    'catalog',
    'carts',
    'checkout',
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

ROOT_URLCONF = 'shopfront.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
                'catalog.context_processors.seen_products',
            ],
        },
    },
]

WSGI_APPLICATION = 'shopfront.wsgi.application'


DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.environ.get('SHOPFRONT_DB_PATH', BASE_DIR / 'db.sqlite3'),
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'shopfront',
    }
}

SESSION_ENGINE = 'django.contrib.sessions.backends.db'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
MEDIA_URL = '/media/'
MEDIA_ROOT = BASE_DIR / 'media'

LOGIN_URL = 'admin:login'

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'catalog': {'handlers': ['console'], 'level': os.environ.get('SHOPFRONT_LOG_LEVEL', 'INFO')},
        'carts': {'handlers': ['console'], 'level': os.environ.get('SHOPFRONT_LOG_LEVEL', 'INFO')},
        'checkout': {'handlers': ['console'], 'level': os.environ.get('SHOPFRONT_LOG_LEVEL', 'INFO')},
    },
}


# --------------------------
# Catalog
# --------------------------
# Maximum number of products kept in the "last seen" list
CATALOG_SEEN_MAX_ITEMS = 6
# Related data loaded for catalog pages; the seen fragment falls back to it
CATALOG_DOMAINS = ['media', 'price', 'text']
CATALOG_SEEN_DOMAINS = None
# Default lifetime of cached fragments in seconds
CATALOG_CACHE_TIMEOUT = 60 * 60 * 24


# --------------------------
# Checkout
# --------------------------
CHECKOUT_STEPS = ['address', 'delivery', 'payment', 'summary']
# Steps rendered together on one page, e.g. ['delivery', 'payment', 'summary']
CHECKOUT_ONEPAGE = []
CHECKOUT_DELIVERY_OPTIONS = [
    {'code': 'standard', 'label': 'Standard Shipping', 'cost': '14.95'},
    {'code': 'pickup', 'label': 'Store Pickup', 'cost': '0.00'},
]
CHECKOUT_PAYMENT_OPTIONS = [
    {'code': 'invoice', 'label': 'Invoice'},
    {'code': 'cod', 'label': 'Cash on Delivery'},
]
