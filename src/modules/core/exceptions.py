"""Error taxonomy shared by every module.

Services raise these; the UI layer catches them and decides what to
show.  Only ``RemoteRejectedError.user_message`` is meant to be shown
verbatim, since it comes from an explicit rejection by the remote
service rather than from a failed transport.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for every error the core reports to its caller."""


class NotFoundError(DomainError):
    """A referenced entity no longer exists.  Refresh the list and retry."""


class InvalidTransitionError(DomainError):
    """A caller supplied a value outside a closed enumeration.

    This is a programming error at the call site and is fatal to the
    operation: the value is rejected, never coerced to a default.
    """


class AuthorizationError(DomainError):
    """The acting user is not allowed to perform the operation."""


class TransportError(DomainError):
    """The request never reached the remote, or the remote was unavailable."""


class InvalidPayloadError(TransportError):
    """The remote answered with a payload that cannot be parsed."""


class RemoteRejectedError(DomainError):
    """The remote service explicitly rejected the request."""

    def __init__(self, status_code: int, user_message: str) -> None:
        super().__init__(f"Remote rejected request ({status_code}): {user_message}")
        self.status_code = status_code
        self.user_message = user_message


class RemoteNotFoundError(RemoteRejectedError, NotFoundError):
    """The remote reported that the target resource does not exist."""


class RemoteForbiddenError(RemoteRejectedError, AuthorizationError):
    """The remote refused the request for the current credentials."""
