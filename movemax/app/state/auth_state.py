"""Auth/Permission gate.

Holds only the signed-in user's id. The user record itself is looked up in
the live staff list on every query, so permission edits take effect at once
and a deleted member is signed out implicitly.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from movemax.shared.core.exceptions import PermissionDeniedError
from movemax.shared.domain.models import PERMISSION_ACTIONS, Role, StaffMember, StaffStatus

logger = logging.getLogger(__name__)

StaffProvider = Callable[[], Sequence[StaffMember]]


class AuthState:
    """Current-user selection and permission checks."""

    def __init__(self, staff_provider: StaffProvider) -> None:
        self._staff_provider = staff_provider
        self.current_user_id: Optional[str] = None

    @property
    def current_user(self) -> Optional[StaffMember]:
        if self.current_user_id is None:
            return None
        return next((s for s in self._staff_provider() if s.id == self.current_user_id), None)

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    @property
    def available_users(self) -> List[StaffMember]:
        """Staff offered on the login screen."""
        return [s for s in self._staff_provider() if s.status == StaffStatus.ACTIVE]

    def login(self, user_id: str) -> bool:
        """Sign in as a known staff member; unknown ids leave state unchanged."""
        if not any(s.id == user_id for s in self._staff_provider()):
            logger.debug(f"Login ignored for unknown user '{user_id}'")
            return False
        self.current_user_id = user_id
        logger.info(f"User {user_id} signed in")
        return True

    def logout(self) -> None:
        if self.current_user_id is not None:
            logger.info(f"User {self.current_user_id} signed out")
        self.current_user_id = None

    def has_permission(self, area: str, action: str) -> bool:
        user = self.current_user
        if user is None:
            return False
        if user.role == Role.ADMIN:
            return True
        permission = user.permissions.get(area)
        if permission is None or action not in PERMISSION_ACTIONS:
            return False
        return getattr(permission, action)

    def require(self, area: str, action: str) -> StaffMember:
        """Return the current user or raise ``PermissionDeniedError``."""
        if not self.has_permission(area, action):
            raise PermissionDeniedError(area, action)
        return self.current_user
