"""Mock-credential sign-in and the role checks every mutating store shares."""

from __future__ import annotations

import logging
from typing import Iterable

from backoffice.errors import Forbidden, InvalidCredentials
from backoffice.models import Account, AccountCredential, Role, Session

logger = logging.getLogger(__name__)


class AuthGate:
    """Owns one Session and validates credentials against a fixed directory.

    The directory is copied once at construction and never edited afterwards.
    Stores receive the gate by reference and call ``require_admin`` or
    ``require_signed_in`` inside their own mutating methods, so a new caller
    cannot skip the check.
    """

    def __init__(self, directory: Iterable[AccountCredential], session: Session | None = None) -> None:
        self._directory: tuple[AccountCredential, ...] = tuple(directory)
        self.session = session if session is not None else Session()

    def authenticate(self, email: str, password: str) -> Account:
        """Sign in on an exact email and password match."""
        for entry in self._directory:
            if entry.account.email == email and entry.password == password:
                self.session.current_user = entry.account
                logger.info("authenticate ::: signed in user_id=%s role=%s", entry.account.id, entry.account.role.value)
                return entry.account

        logger.warning("authenticate ::: rejected email=%r", email)
        raise InvalidCredentials("Invalid email or password")

    def end_session(self) -> None:
        """Sign out; calling it while signed out is harmless."""
        if self.session.current_user is not None:
            logger.info("end_session ::: signed out user_id=%s", self.session.current_user.id)
        self.session.current_user = None

    def current_role(self) -> Role:
        user = self.session.current_user
        if user is None:
            return Role.NONE
        return user.role

    @property
    def current_user(self) -> Account | None:
        return self.session.current_user

    @property
    def is_admin(self) -> bool:
        return self.current_role() is Role.ADMIN

    @property
    def is_staff(self) -> bool:
        return self.current_role() is Role.STAFF

    def require_admin(self, action: str) -> None:
        """Raise Forbidden unless an admin is signed in."""
        if not self.is_admin:
            logger.warning("require_admin ::: blocked action=%s role=%s", action, self.current_role().value)
            raise Forbidden(f"Admin only: cannot {action}", details={"action": action})

    def require_signed_in(self, action: str) -> None:
        """Raise Forbidden when nobody is signed in."""
        if self.current_role() is Role.NONE:
            logger.warning("require_signed_in ::: blocked action=%s", action)
            raise Forbidden(f"Sign in required: cannot {action}", details={"action": action})
