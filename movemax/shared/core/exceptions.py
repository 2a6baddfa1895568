"""User-facing failures the shell turns into error toasts.

Store mutations never raise these; they are reserved for form/upload checks
and permission-gated service calls.
"""

from __future__ import annotations


class MoveMaxError(Exception):
    """Base class for handled application errors."""


class FormValidationError(MoveMaxError):
    """A required field is missing or a numeric field is out of range."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class UploadValidationError(MoveMaxError):
    """An uploaded file was rejected before processing."""


class PermissionDeniedError(MoveMaxError):
    """The signed-in user lacks the area/action permission for a call."""

    def __init__(self, area: str, action: str) -> None:
        super().__init__(f"Missing '{action}' permission on '{area}'")
        self.area = area
        self.action = action


class AuthenticationRequiredError(MoveMaxError):
    """An action that acts on behalf of a user was called with nobody signed in."""

    def __init__(self, message: str = "Please log in") -> None:
        super().__init__(message)
