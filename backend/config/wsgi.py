"""
WSGI config for the backend project.

Besides exposing the application object, this is where the process creates
the risk table if the database does not have it yet.
"""
import logging
import os

from django.core.wsgi import get_wsgi_application
from django.db import DatabaseError

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()

logger = logging.getLogger(__name__)

from riskdata.models import RiskRecord  # noqa: E402  (needs the app registry)
from riskdata.tables import ensure_table  # noqa: E402

try:
    ensure_table(RiskRecord)
except DatabaseError as exc:
    # The views call ensure_table again, so a database that is down at
    # start-up only delays table creation until the first request.
    logger.error("Could not create the risk table at start-up: %s", exc)
