from __future__ import annotations

from dataclasses import dataclass

from .exceptions import NotAuthenticatedError, RemoteRejectedError, SupTrusError


@dataclass(frozen=True)
class UserFacingError:
    message: str
    details: str | None = None
    retryable: bool = False

    @property
    def technical_details(self) -> str | None:
        if self.details:
            return self.details
        return None


def to_user_facing_error(exc: SupTrusError) -> UserFacingError:
    if isinstance(exc, NotAuthenticatedError):
        return UserFacingError(message="Connect your identity to continue", details=exc.code)
    primary = exc.message.strip() or "Request failed"
    details = exc.code if not exc.method else f"{exc.code} ({exc.method})"
    if exc.details:
        details = f"{details}: {exc.details}"
    # Err replies are business decisions; retrying the same call will not change them.
    return UserFacingError(message=primary, details=details, retryable=not isinstance(exc, RemoteRejectedError))
