"""Credential store: user accounts, login verification and the seeded admin."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError
from app.core.security import hash_password, verify_password
from app.models.user import ROLE_ADMIN, ROLE_USER, User
from app.schemas.users import UserAccount

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_PASSWORD = "change-me-in-production"


class CredentialStore:
    """
    Reads and writes the users table.

    Every read returns UserAccount, so password hashes never leave this class;
    verify_credentials is the only method that looks at one.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_username(self, username: str) -> UserAccount | None:
        user = self.db.query(User).filter(User.username == username).first()
        return UserAccount.model_validate(user) if user else None

    def find_by_id(self, user_id: int) -> UserAccount | None:
        user = self.db.get(User, user_id)
        return UserAccount.model_validate(user) if user else None

    def list_all_except_admin(self) -> list[UserAccount]:
        users = (
            self.db.query(User)
            .filter(User.role != ROLE_ADMIN)
            .order_by(User.id)
            .all()
        )
        return [UserAccount.model_validate(u) for u in users]

    def has_admin(self) -> bool:
        return self.db.query(User.id).filter(User.role == ROLE_ADMIN).first() is not None

    def existing_ids(self, user_ids: list[int]) -> set[int]:
        """Subset of user_ids that name existing users."""
        if not user_ids:
            return set()
        rows = self.db.query(User.id).filter(User.id.in_(user_ids)).all()
        return {row.id for row in rows}

    def create(self, username: str, password_hash: str, role: str = ROLE_USER) -> UserAccount:
        """Insert a user. Raises ConflictError if the username is taken."""
        if self.db.query(User.id).filter(User.username == username).first() is not None:
            raise ConflictError("Username already exists")
        user = User(username=username, password_hash=password_hash, role=role)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent insert of the same name.
            self.db.rollback()
            raise ConflictError("Username already exists") from e
        self.db.refresh(user)
        logger.info("User created: id=%s username=%s role=%s", user.id, user.username, user.role)
        return UserAccount.model_validate(user)

    def delete(self, user_id: int) -> bool:
        """
        Delete a non-admin user. Returns False when the id is unknown or names an admin.
        Assignments and sessions go with the user.
        """
        user = self.db.get(User, user_id)
        if user is None or user.role == ROLE_ADMIN:
            return False
        self.db.delete(user)
        self.db.commit()
        logger.info("User deleted: id=%s", user_id)
        return True

    def verify_credentials(self, username: str, password: str) -> UserAccount | None:
        """Return the account if username and password match, else None."""
        user = self.db.query(User).filter(User.username == username).first()
        if user is None or not verify_password(password, user.password_hash):
            return None
        return UserAccount.model_validate(user)

    def seed_admin(self, username: str, password_hash: str) -> bool:
        """Create the admin account if no user has that name. Returns True if created."""
        try:
            self.create(username, password_hash, role=ROLE_ADMIN)
        except ConflictError:
            return False
        logger.info("Default admin user created: %s", username)
        return True


def ensure_admin(credentials: CredentialStore, settings: "Settings") -> bool:
    """
    Seed the configured admin on first run. Returns True if an account was created.

    Any existing admin counts as "already seeded", so renaming ADMIN_USERNAME later
    never produces a second admin.
    """
    if credentials.has_admin():
        return False
    password = settings.ADMIN_PASSWORD.get_secret_value()
    if settings.APP_ENV == "prod" and password == DEFAULT_ADMIN_PASSWORD:
        logger.warning("Seeding admin with the default password; set ADMIN_PASSWORD.")
    return credentials.seed_admin(
        settings.ADMIN_USERNAME,
        hash_password(password, rounds=settings.BCRYPT_ROUNDS),
    )
