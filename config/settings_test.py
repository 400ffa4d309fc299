import os

os.environ.setdefault('SECRET_KEY', 'test-secret-key')
os.environ.setdefault('JWT_SECRET', 'test-jwt-secret')
os.environ.setdefault('DB_NAME', 'odonto_test')
os.environ.setdefault('DB_USER', 'odonto')
os.environ.setdefault('DB_PASS', 'odonto')
os.environ.setdefault('DB_HOST', 'localhost')

from config.settings import *  # noqa: E402, F403

DEBUG = False
ALLOWED_HOSTS = ['*']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}
