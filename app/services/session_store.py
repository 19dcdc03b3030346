"""Server-side session store: opaque cookie token -> {user_id, username, role}."""

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from app.core.security import new_session_token
from app.models.session import UserSession
from app.schemas.auth import CurrentUser
from app.schemas.users import UserAccount

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionStore:
    """Creates, resolves and destroys login sessions held in the user_sessions table."""

    def __init__(self, db: Session, ttl: timedelta) -> None:
        self.db = db
        self.ttl = ttl

    def create(self, account: UserAccount) -> str:
        """Start a session for account and return its token."""
        token = new_session_token()
        self.db.add(
            UserSession(
                token=token,
                user_id=account.id,
                username=account.username,
                role=account.role,
                expires_at=_utcnow() + self.ttl,
            )
        )
        self.db.commit()
        return token

    def get(self, token: str | None) -> CurrentUser | None:
        """Resolve a token; None if missing, unknown or expired (expired rows are dropped)."""
        if not token:
            return None
        row = (
            self.db.query(UserSession)
            .filter(UserSession.token == token, UserSession.expires_at > _utcnow())
            .first()
        )
        if row is None:
            # Unknown or expired; drop the expired row if there is one.
            self.db.query(UserSession).filter(UserSession.token == token).delete(
                synchronize_session=False
            )
            self.db.commit()
            return None
        return CurrentUser(id=row.user_id, username=row.username, role=row.role)

    def destroy(self, token: str | None) -> bool:
        if not token:
            return False
        deleted = (
            self.db.query(UserSession)
            .filter(UserSession.token == token)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted > 0

    def purge_expired(self, now: datetime | None = None) -> int:
        """Delete sessions past their expiry. Idempotent: safe to run repeatedly."""
        cutoff = now or _utcnow()
        deleted_count = (
            self.db.query(UserSession)
            .filter(UserSession.expires_at <= cutoff)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        if deleted_count > 0:
            logger.info(
                "Session purge: cutoff=%s, sessions_deleted=%s",
                cutoff.isoformat(),
                deleted_count,
            )
        return deleted_count
