"""
Client for the JSON browser-automation wire protocol.

Modules:
- config: DriverConfig (executor URL, timeouts, trace flag, default capabilities)
- errors: error taxonomy (transport, decode, remote status, caller contract)
- http_client: one-request-per-connection HTTP transport
- codec: request bodies, response envelopes, value narrowing
- commands: command descriptor table
- router: CommandRouter (template substitution + dispatch)
- session: RemoteSession, new_remote, remote_status
- element: RemoteElement, WebElement
- locators: By, Locator
- models: Cookie, Point, Size, Status
"""

from .commands import COMMANDS, Command, CommandDescriptor
from .config import DriverConfig
from .element import RemoteElement, WebElement
from .errors import (
    CallerContractError,
    HttpStatusError,
    InvalidLocatorError,
    InvalidSessionIdError,
    NoSuchElementError,
    ProtocolDecodeError,
    RemoteOperationError,
    SessionClosedError,
    SessionCreationError,
    StaleElementReferenceError,
    TransportError,
    WebDriverError,
)
from .locators import By, Locator
from .models import Cookie, Point, Size, Status
from .router import CommandRouter
from .session import RemoteSession, new_remote, remote_status

__all__ = [
    "COMMANDS",
    "By",
    "CallerContractError",
    "Command",
    "CommandDescriptor",
    "CommandRouter",
    "Cookie",
    "DriverConfig",
    "HttpStatusError",
    "InvalidLocatorError",
    "InvalidSessionIdError",
    "Locator",
    "NoSuchElementError",
    "Point",
    "ProtocolDecodeError",
    "RemoteElement",
    "RemoteOperationError",
    "RemoteSession",
    "SessionClosedError",
    "SessionCreationError",
    "Size",
    "StaleElementReferenceError",
    "Status",
    "TransportError",
    "WebDriverError",
    "WebElement",
    "new_remote",
    "remote_status",
]
