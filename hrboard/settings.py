"""
Django settings for hrboard project.
"""

from pathlib import Path
import os

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent


def _env_flag(name, default):
    return os.environ.get(name, default).lower() in ('1', 'true', 'yes')


# -------------------------
# Basic / environment
# -------------------------
SECRET_KEY = os.environ.get('HRBOARD_SECRET_KEY', 'django-insecure-dev-secret-for-local')

DEBUG = _env_flag('HRBOARD_DEBUG', 'True')

ALLOWED_HOSTS = (
    os.environ.get('HRBOARD_ALLOWED_HOSTS', '')
    .split(',') if os.environ.get('HRBOARD_ALLOWED_HOSTS') else []
)


# -------------------------
# Installed apps / middleware
# -------------------------
INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # project apps
    'accounts',
    'jobs',
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

ROOT_URLCONF = 'hrboard.urls'


# -------------------------
# Templates
# -------------------------
TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [os.path.join(BASE_DIR, 'templates')],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.template.context_processors.static',
                'django.template.context_processors.media',
                'django.template.context_processors.csrf',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]


WSGI_APPLICATION = 'hrboard.wsgi.application'


# -------------------------
# Database (sqlite for dev)
# -------------------------
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.environ.get('HRBOARD_DATABASE_PATH', BASE_DIR / 'db.sqlite3'),
    }
}


# -------------------------
# Password validation
# -------------------------
AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]


# -------------------------
# Internationalization
# -------------------------
LANGUAGE_CODE = os.environ.get('HRBOARD_LANGUAGE_CODE', 'en-us')
TIME_ZONE = os.environ.get('HRBOARD_TIME_ZONE', 'UTC')
USE_I18N = True
USE_TZ = True


# -------------------------
# Static & media
# -------------------------
STATIC_URL = '/static/'
STATIC_ROOT = os.environ.get('HRBOARD_STATIC_ROOT', os.path.join(BASE_DIR, 'staticfiles'))

MEDIA_URL = '/media/'
MEDIA_ROOT = os.environ.get('HRBOARD_MEDIA_ROOT', os.path.join(BASE_DIR, 'media'))


# -------------------------
# Auth
# -------------------------
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
AUTH_USER_MODEL = 'accounts.User'

LOGIN_URL = '/accounts/login/'
LOGIN_REDIRECT_URL = '/accounts/dashboard-redirect/'
LOGOUT_REDIRECT_URL = '/accounts/login/'


# -------------------------
# Job board
# -------------------------
# Page size used when the caller does not send a usable ``limit``.
JOBS_PAGE_SIZE = int(os.environ.get('HRBOARD_PAGE_SIZE', 6))
JOBS_MAX_PAGE_SIZE = int(os.environ.get('HRBOARD_MAX_PAGE_SIZE', 100))

# salaryMin / salaryMax are always accepted. When this is off they are
# carried on the criteria but do not constrain the query.
JOBS_APPLY_SALARY_FILTER = _env_flag('HRBOARD_APPLY_SALARY_FILTER', 'True')

# Resume uploads (PDF/DOCX)
RESUME_MAX_UPLOAD_MB = int(os.environ.get('HRBOARD_MAX_UPLOAD_MB', 5))
RESUME_ALLOWED_EXTENSIONS = ('.pdf', '.docx')


# -------------------------
# Logging (basic)
# -------------------------
LOG_LEVEL = os.environ.get('HRBOARD_LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {'format': '%(asctime)s %(levelname)s %(name)s: %(message)s'},
    },
    'handlers': {
        'console': {'class': 'logging.StreamHandler', 'formatter': 'simple'},
    },
    'root': {
        'handlers': ['console'],
        'level': 'INFO',
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'INFO' if DEBUG else 'WARNING',
            'propagate': False,
        },
        'jobs': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'accounts': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}


# -------------------------
# Security (production suggestions)
# -------------------------
# In production, you should set these via environment variables:
# SECURE_HSTS_SECONDS = 31536000
# SECURE_SSL_REDIRECT = True
# SESSION_COOKIE_SECURE = True
# CSRF_COOKIE_SECURE = True
SESSION_COOKIE_SECURE = _env_flag('HRBOARD_SECURE_COOKIES', 'False')
CSRF_COOKIE_SECURE = SESSION_COOKIE_SECURE
