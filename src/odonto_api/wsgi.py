import os

from config.structlog_config import configure_logging

configure_logging()
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

# os containers de DI são montados em OdontoApiConfig.ready()
from django.core.wsgi import get_wsgi_application  # noqa: E402

application = get_wsgi_application()
