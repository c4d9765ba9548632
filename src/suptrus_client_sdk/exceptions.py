from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SupTrusError(Exception):
    code: str
    message: str
    method: str | None = None
    details: object | None = None

    def __str__(self) -> str:
        where = f" method={self.method}" if self.method else ""
        return f"{self.code}: {self.message}{where}"


class ProviderUnavailableError(SupTrusError):
    """Identity provider unreachable or returned something unusable."""


class AuthenticationDeniedError(SupTrusError):
    """User cancelled the login or the provider rejected it."""


class NotAuthenticatedError(SupTrusError):
    """A remote operation was invoked without a live remote handle."""


@dataclass
class RemoteCallFailedError(SupTrusError):
    """Transport, serialization or replica-side failure of an otherwise valid call."""

    cause: BaseException | None = None


class RemoteRejectedError(SupTrusError):
    """The canister answered with an Err result."""

    @property
    def reason(self) -> str:
        return self.message


def not_authenticated(method: str | None = None) -> NotAuthenticatedError:
    return NotAuthenticatedError(
        code="NOT_AUTHENTICATED",
        message="Not authenticated - connect your identity first",
        method=method,
    )
