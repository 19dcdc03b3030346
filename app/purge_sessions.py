"""
CLI entrypoint for the expired-session purge. Run from cron, e.g.:

  python -m app.purge_sessions

Or hourly: 0 * * * * cd /path/to/record-desk && .venv/bin/python -m app.purge_sessions
"""

import logging
import sys
from datetime import timedelta

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.logging_config import setup_logging
from app.services.session_store import SessionStore

logger = logging.getLogger(__name__)


def main() -> int:
    """Delete every session whose expiry has passed."""
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    db = SessionLocal()
    try:
        store = SessionStore(db, ttl=timedelta(hours=settings.SESSION_TTL_HOURS))
        deleted = store.purge_expired()
        logger.info("Session purge completed: sessions_deleted=%s", deleted)
        return 0
    except Exception as e:
        logger.exception("Session purge failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
