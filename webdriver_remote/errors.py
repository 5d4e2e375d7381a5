"""
Error taxonomy for the remote protocol client.

Four families, all rooted at WebDriverError:
- TransportError: the peer could not be reached (refused, timeout, DNS)
- ProtocolDecodeError / HttpStatusError: the peer answered with something that is not an envelope
- RemoteOperationError: the envelope reports a non-success status
- CallerContractError: the client was misused (nothing is sent to the peer)
"""

from __future__ import annotations

from typing import Any


class WebDriverError(Exception):
    pass


class TransportError(WebDriverError):
    pass


class ProtocolDecodeError(WebDriverError):
    pass


class HttpStatusError(WebDriverError):
    def __init__(self, http_status: int, body: str = "", url: str = "") -> None:
        self.http_status = http_status
        self.body = body
        self.url = url
        snippet = body.strip()[:200]
        msg = f"Unexpected HTTP status {http_status}"
        if url:
            msg += f" for {url}"
        if snippet:
            msg += f": {snippet}"
        super().__init__(msg)


class SessionCreationError(WebDriverError):
    pass


# Remote operation errors


class RemoteOperationError(WebDriverError):
    """Non-success envelope status, carrying the peer's status code and message."""

    status: int = 13
    error: str = "unknown error"

    def __init__(self, message: str = "", *, status: int | None = None, value: Any = None) -> None:
        if status is not None:
            self.status = status
        self.message = message
        self.value = value
        super().__init__(f"{self.error} ({self.status}): {message}" if message else f"{self.error} ({self.status})")


class InvalidSessionIdError(RemoteOperationError):
    status = 6
    error = "invalid session id"


class NoSuchElementError(RemoteOperationError):
    status = 7
    error = "no such element"


class NoSuchFrameError(RemoteOperationError):
    status = 8
    error = "no such frame"


class UnknownCommandError(RemoteOperationError):
    status = 9
    error = "unknown command"


class StaleElementReferenceError(RemoteOperationError):
    status = 10
    error = "stale element reference"


class ElementNotVisibleError(RemoteOperationError):
    status = 11
    error = "element not visible"


class InvalidElementStateError(RemoteOperationError):
    status = 12
    error = "invalid element state"


class ElementNotSelectableError(RemoteOperationError):
    status = 15
    error = "element not selectable"


class JavaScriptError(RemoteOperationError):
    status = 17
    error = "javascript error"


class XPathLookupError(RemoteOperationError):
    status = 19
    error = "xpath lookup error"


class OperationTimeoutError(RemoteOperationError):
    status = 21
    error = "timeout"


class NoSuchWindowError(RemoteOperationError):
    status = 23
    error = "no such window"


class InvalidCookieDomainError(RemoteOperationError):
    status = 24
    error = "invalid cookie domain"


class UnableToSetCookieError(RemoteOperationError):
    status = 25
    error = "unable to set cookie"


class UnexpectedAlertOpenError(RemoteOperationError):
    status = 26
    error = "unexpected alert open"


class NoAlertOpenError(RemoteOperationError):
    status = 27
    error = "no such alert"


class ScriptTimeoutError(RemoteOperationError):
    status = 28
    error = "script timeout"


class InvalidElementCoordinatesError(RemoteOperationError):
    status = 29
    error = "invalid element coordinates"


class InvalidSelectorError(RemoteOperationError):
    status = 32
    error = "invalid selector"


class SessionNotCreatedError(RemoteOperationError):
    status = 33
    error = "session not created"


class MoveTargetOutOfBoundsError(RemoteOperationError):
    status = 34
    error = "move target out of bounds"


_REMOTE_ERRORS: tuple[type[RemoteOperationError], ...] = (
    InvalidSessionIdError,
    NoSuchElementError,
    NoSuchFrameError,
    UnknownCommandError,
    StaleElementReferenceError,
    ElementNotVisibleError,
    InvalidElementStateError,
    ElementNotSelectableError,
    JavaScriptError,
    XPathLookupError,
    OperationTimeoutError,
    NoSuchWindowError,
    InvalidCookieDomainError,
    UnableToSetCookieError,
    UnexpectedAlertOpenError,
    NoAlertOpenError,
    ScriptTimeoutError,
    InvalidElementCoordinatesError,
    InvalidSelectorError,
    SessionNotCreatedError,
    MoveTargetOutOfBoundsError,
)

ERRORS_BY_STATUS: dict[int, type[RemoteOperationError]] = {cls.status: cls for cls in _REMOTE_ERRORS}
ERRORS_BY_NAME: dict[str, type[RemoteOperationError]] = {cls.error: cls for cls in _REMOTE_ERRORS}
# Newer peers use these names for the same conditions.
ERRORS_BY_NAME.update(
    {
        "element not interactable": ElementNotVisibleError,
        "element click intercepted": InvalidElementStateError,
        "unknown method": UnknownCommandError,
    }
)


def remote_error(status: int | None = None, message: str = "", *, name: str | None = None, value: Any = None) -> RemoteOperationError:
    """Build the RemoteOperationError subclass for a numeric status or error name."""
    cls: type[RemoteOperationError] | None = None
    if status is not None:
        cls = ERRORS_BY_STATUS.get(status)
    if cls is None and name:
        cls = ERRORS_BY_NAME.get(name.strip().lower())
    if cls is None:
        return RemoteOperationError(message, status=status, value=value)
    return cls(message, status=status if status is not None else cls.status, value=value)


# Caller contract errors


class CallerContractError(WebDriverError):
    pass


class UnknownOperationError(CallerContractError):
    pass


class UnresolvedPlaceholderError(CallerContractError):
    pass


class InvalidLocatorError(CallerContractError):
    pass


class SessionClosedError(CallerContractError):
    pass


__all__ = [
    "ERRORS_BY_NAME",
    "ERRORS_BY_STATUS",
    "CallerContractError",
    "ElementNotSelectableError",
    "ElementNotVisibleError",
    "HttpStatusError",
    "InvalidCookieDomainError",
    "InvalidElementCoordinatesError",
    "InvalidElementStateError",
    "InvalidLocatorError",
    "InvalidSelectorError",
    "InvalidSessionIdError",
    "JavaScriptError",
    "MoveTargetOutOfBoundsError",
    "NoAlertOpenError",
    "NoSuchElementError",
    "NoSuchFrameError",
    "NoSuchWindowError",
    "OperationTimeoutError",
    "ProtocolDecodeError",
    "RemoteOperationError",
    "ScriptTimeoutError",
    "SessionClosedError",
    "SessionCreationError",
    "SessionNotCreatedError",
    "StaleElementReferenceError",
    "TransportError",
    "UnableToSetCookieError",
    "UnexpectedAlertOpenError",
    "UnknownCommandError",
    "UnknownOperationError",
    "UnresolvedPlaceholderError",
    "WebDriverError",
    "XPathLookupError",
    "remote_error",
]
