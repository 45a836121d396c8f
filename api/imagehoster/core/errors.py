"""Domain errors raised by the gallery services.

Stores signal a missing row by returning ``None``; these exceptions are raised
where an operation cannot proceed and are translated to HTTP responses by the
routers.
"""

from __future__ import annotations

import typing

if typing.TYPE_CHECKING:  # pragma: no cover
    from imagehoster.services.gallery_service import ImageDetail


class ImageHosterError(Exception):
    """Base class for expected, request-scoped failures."""


class NotFound(ImageHosterError):
    def __init__(self, resource: str, key: object) -> None:
        super().__init__(f"{resource} {key!r} not found")
        self.resource = resource
        self.key = key


class PasswordPolicyViolation(ImageHosterError):
    """Registration password lacks a letter, a digit, or another character."""

    message = "Password must contain at least 1 alphabet, 1 number & 1 special character"

    def __init__(self, username: str | None = None) -> None:
        super().__init__(self.message)
        self.username = username


class OwnershipViolation(ImageHosterError):
    """Caller tried to mutate an image owned by someone else.

    ``detail`` holds the image's current read-only view so callers can show the
    refused state next to ``message``.
    """

    def __init__(self, action: str, detail: "ImageDetail") -> None:
        self.action = action
        self.detail = detail
        self.message = f"Only the owner of the image can {action} the image"
        super().__init__(self.message)


class Conflict(ImageHosterError):
    """A uniqueness constraint rejected a write."""


class TagConflict(Conflict):
    def __init__(self, name: str) -> None:
        super().__init__(f"Tag {name!r} was created concurrently")
        self.name = name


class UsernameTaken(Conflict):
    def __init__(self, username: str) -> None:
        super().__init__(f"Username {username!r} is already registered")
        self.username = username


class TransactionFailure(ImageHosterError):
    """The unit of work could not be committed and was rolled back."""
