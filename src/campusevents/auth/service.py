"""AuthService - account registration, login and role moderation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from campusevents.auth.context import require_admin
from campusevents.auth.exceptions import UnauthorizedError
from campusevents.auth.passwords import DEFAULT_ROUNDS, hash_password, verify_password
from campusevents.auth.session import USER_ROLE_KEY, USER_SESSION_KEY
from campusevents.datastore import Role, UserNotFoundError

if TYPE_CHECKING:
    from campusevents.auth.session import SessionStore
    from campusevents.datastore import Datastore, User

logger = logging.getLogger(__name__)


class AuthService:
    """Resolves identities and moderates accounts.

    Authentication failures are reported uniformly as ``None``: callers cannot
    tell an unknown username from a wrong password or a deactivated account.
    """

    def __init__(self, datastore: Datastore, bcrypt_rounds: int = DEFAULT_ROUNDS) -> None:
        """Initialize the AuthService.

        Args:
            datastore: Datastore instance for user persistence.
            bcrypt_rounds: Cost factor for new password hashes.
        """
        self.datastore = datastore
        self.bcrypt_rounds = bcrypt_rounds

    def register_user(
        self,
        username: str,
        email: str,
        password: str,
        full_name: str,
        department: str | None = None,
        student_id: str | None = None,
        year: int | None = None,
    ) -> User:
        """Create a STUDENT account.

        Raises:
            UserExistsError: If username or email is taken.
        """
        user = self.datastore.create_user(
            username=username,
            email=email,
            password_hash=hash_password(password, rounds=self.bcrypt_rounds),
            full_name=full_name,
            role=Role.STUDENT,
            department=department,
            student_id=student_id,
            year=year,
        )
        logger.info("Registered user %s (%s)", user.username, user.id)
        return user

    def create_admin(self, username: str, email: str, password: str, full_name: str) -> User:
        """Create an ADMIN account. Intended for bootstrapping from the CLI."""
        user = self.datastore.create_user(
            username=username,
            email=email,
            password_hash=hash_password(password, rounds=self.bcrypt_rounds),
            full_name=full_name,
            role=Role.ADMIN,
        )
        logger.info("Created admin %s (%s)", user.username, user.id)
        return user

    def authenticate(self, username: str, password: str) -> User | None:
        """Verify credentials.

        Returns:
            The user on success, None otherwise.
        """
        try:
            user = self.datastore.get_user_by_username(username)
        except UserNotFoundError:
            logger.warning("Failed login for %r", username)
            return None

        if not user.active or not verify_password(password, user.password_hash):
            logger.warning("Failed login for %r", username)
            return None
        return user

    def login(self, session: SessionStore, user: User) -> None:
        """Bind the user to the session."""
        session.set(USER_SESSION_KEY, user.id)
        session.set(USER_ROLE_KEY, user.role)
        logger.info("User %s logged in", user.username)

    def logout(self, session: SessionStore) -> None:
        """Clear identity from the session and invalidate it."""
        session.remove(USER_SESSION_KEY)
        session.invalidate()

    def current_user(self, session: SessionStore) -> User | None:
        """Resolve the logged-in user.

        A missing id, an id that no longer resolves, or a deactivated account
        all mean "no current user".
        """
        user_id = session.get(USER_SESSION_KEY)
        if user_id is None:
            return None
        try:
            user = self.datastore.get_user(str(user_id))
        except UserNotFoundError:
            return None
        return user if user.active else None

    def list_users(self) -> list[User]:
        """List all users."""
        return self.datastore.list_users()

    def list_departments(self) -> list[str]:
        """List distinct departments declared by users."""
        return self.datastore.list_departments()

    def update_user_role(self, user_id: str, role: Role | str, admin: User) -> User:
        """Change another user's role.

        Raises:
            UnauthorizedError: If admin is not an admin, or targets themself.
            ValueError: If role is not a recognized Role.
            UserNotFoundError: If user doesn't exist.
        """
        require_admin(admin, "update user roles")
        new_role = Role(role)
        target = self.datastore.get_user(user_id)
        if target.id == admin.id:
            raise UnauthorizedError("Cannot modify your own role")

        updated = self.datastore.update_user(user_id, role=new_role)
        logger.info("Admin %s set role of %s to %s", admin.username, target.username, new_role)
        return updated

    def update_user_status(self, user_id: str, active: bool, admin: User) -> User:
        """Activate or deactivate another user's account.

        Raises:
            UnauthorizedError: If admin is not an admin, or targets themself.
            UserNotFoundError: If user doesn't exist.
        """
        require_admin(admin, "update user status")
        target = self.datastore.get_user(user_id)
        if target.id == admin.id:
            raise UnauthorizedError("Cannot modify your own status")

        updated = self.datastore.update_user(user_id, active=active)
        logger.info(
            "Admin %s %s user %s",
            admin.username,
            "activated" if active else "deactivated",
            target.username,
        )
        return updated
