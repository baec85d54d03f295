"""python-fritzaha exceptions."""

from __future__ import annotations

from asyncio import TimeoutError as _asyncioTimeoutError


class FritzException(Exception):
    """Base exception for library errors."""


class TimeoutError(FritzException, _asyncioTimeoutError):
    """Timeout exception for device errors."""

    def __repr__(self) -> str:
        return FritzException.__repr__(self)

    def __str__(self) -> str:
        return FritzException.__str__(self)


class _ConnectionError(FritzException):
    """Connection exception for device errors."""


class LoginError(FritzException):
    """Base exception for failures inside the login handshake."""


class StateFetchError(LoginError):
    """The login challenge could not be fetched or parsed."""


class MalformedChallengeError(LoginError):
    """The challenge returned by the device has an unexpected structure."""


class SubmitError(LoginError):
    """The challenge response could not be submitted or no SID was returned."""


class AuthenticationError(LoginError):
    """The device rejected the username or password."""


class LoginFailedError(FritzException):
    """Raised for any failure during session creation.

    The stage error that caused the failure is available as :attr:`cause`.
    """

    def __init__(self, *args, cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(*args)


class InvalidValueError(FritzException):
    """A temperature value could not be converted."""


class MissingParameterError(FritzException):
    """A command requires a parameter that was not given."""


class CommandError(FritzException):
    """Sending a command to the device failed."""
