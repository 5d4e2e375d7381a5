"""
Command descriptor table: logical operation -> HTTP method + URL template.

Templates use `{sessionId}` and `{elementId}` plus a few auxiliary path
variables (`{name}`, `{propertyName}`, `{windowHandle}`).
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

GET = "GET"
POST = "POST"
DELETE = "DELETE"


@dataclass(frozen=True, slots=True)
class CommandDescriptor:
    name: str
    method: str
    path: str

    @property
    def has_body(self) -> bool:
        return self.method == POST


class Command:
    """Logical operation names."""

    STATUS = "status"
    NEW_SESSION = "newSession"
    GET_CAPABILITIES = "getCapabilities"
    QUIT = "quit"

    SET_TIMEOUTS = "setTimeouts"
    SET_ASYNC_SCRIPT_TIMEOUT = "setAsyncScriptTimeout"
    SET_IMPLICIT_WAIT_TIMEOUT = "setImplicitWaitTimeout"

    GET_CURRENT_WINDOW_HANDLE = "getCurrentWindowHandle"
    GET_WINDOW_HANDLES = "getWindowHandles"
    SWITCH_TO_WINDOW = "switchToWindow"
    CLOSE_WINDOW = "closeWindow"
    GET_WINDOW_SIZE = "getWindowSize"
    SET_WINDOW_SIZE = "setWindowSize"
    MAXIMIZE_WINDOW = "maximizeWindow"
    SWITCH_TO_FRAME = "switchToFrame"

    GET = "get"
    GET_CURRENT_URL = "getCurrentUrl"
    GO_BACK = "goBack"
    GO_FORWARD = "goForward"
    REFRESH = "refresh"
    GET_TITLE = "getTitle"
    GET_PAGE_SOURCE = "getPageSource"

    FIND_ELEMENT = "findElement"
    FIND_ELEMENTS = "findElements"
    FIND_CHILD_ELEMENT = "findChildElement"
    FIND_CHILD_ELEMENTS = "findChildElements"
    GET_ACTIVE_ELEMENT = "getActiveElement"

    EXECUTE_SCRIPT = "executeScript"
    EXECUTE_ASYNC_SCRIPT = "executeAsyncScript"
    SCREENSHOT = "screenshot"

    GET_ALL_COOKIES = "getAllCookies"
    ADD_COOKIE = "addCookie"
    DELETE_ALL_COOKIES = "deleteAllCookies"
    DELETE_COOKIE = "deleteCookie"

    GET_ALERT_TEXT = "getAlertText"
    SET_ALERT_TEXT = "setAlertText"
    ACCEPT_ALERT = "acceptAlert"
    DISMISS_ALERT = "dismissAlert"

    CLICK_ELEMENT = "clickElement"
    SEND_KEYS_TO_ELEMENT = "sendKeysToElement"
    CLEAR_ELEMENT = "clearElement"
    SUBMIT_ELEMENT = "submitElement"
    GET_ELEMENT_TEXT = "getElementText"
    GET_ELEMENT_TAG_NAME = "getElementTagName"
    GET_ELEMENT_ATTRIBUTE = "getElementAttribute"
    GET_ELEMENT_CSS_PROPERTY = "getElementCssProperty"
    IS_ELEMENT_SELECTED = "isElementSelected"
    IS_ELEMENT_ENABLED = "isElementEnabled"
    IS_ELEMENT_DISPLAYED = "isElementDisplayed"
    GET_ELEMENT_LOCATION = "getElementLocation"
    GET_ELEMENT_LOCATION_IN_VIEW = "getElementLocationInView"
    GET_ELEMENT_SIZE = "getElementSize"


_S = "/session/{sessionId}"
_E = _S + "/element/{elementId}"

_TABLE: tuple[CommandDescriptor, ...] = (
    CommandDescriptor(Command.STATUS, GET, "/status"),
    CommandDescriptor(Command.NEW_SESSION, POST, "/session"),
    CommandDescriptor(Command.GET_CAPABILITIES, GET, _S),
    CommandDescriptor(Command.QUIT, DELETE, _S),
    CommandDescriptor(Command.SET_TIMEOUTS, POST, _S + "/timeouts"),
    CommandDescriptor(Command.SET_ASYNC_SCRIPT_TIMEOUT, POST, _S + "/timeouts/async_script"),
    CommandDescriptor(Command.SET_IMPLICIT_WAIT_TIMEOUT, POST, _S + "/timeouts/implicit_wait"),
    CommandDescriptor(Command.GET_CURRENT_WINDOW_HANDLE, GET, _S + "/window_handle"),
    CommandDescriptor(Command.GET_WINDOW_HANDLES, GET, _S + "/window_handles"),
    CommandDescriptor(Command.SWITCH_TO_WINDOW, POST, _S + "/window"),
    CommandDescriptor(Command.CLOSE_WINDOW, DELETE, _S + "/window"),
    CommandDescriptor(Command.GET_WINDOW_SIZE, GET, _S + "/window/{windowHandle}/size"),
    CommandDescriptor(Command.SET_WINDOW_SIZE, POST, _S + "/window/{windowHandle}/size"),
    CommandDescriptor(Command.MAXIMIZE_WINDOW, POST, _S + "/window/{windowHandle}/maximize"),
    CommandDescriptor(Command.SWITCH_TO_FRAME, POST, _S + "/frame"),
    CommandDescriptor(Command.GET, POST, _S + "/url"),
    CommandDescriptor(Command.GET_CURRENT_URL, GET, _S + "/url"),
    CommandDescriptor(Command.GO_BACK, POST, _S + "/back"),
    CommandDescriptor(Command.GO_FORWARD, POST, _S + "/forward"),
    CommandDescriptor(Command.REFRESH, POST, _S + "/refresh"),
    CommandDescriptor(Command.GET_TITLE, GET, _S + "/title"),
    CommandDescriptor(Command.GET_PAGE_SOURCE, GET, _S + "/source"),
    CommandDescriptor(Command.FIND_ELEMENT, POST, _S + "/element"),
    CommandDescriptor(Command.FIND_ELEMENTS, POST, _S + "/elements"),
    CommandDescriptor(Command.FIND_CHILD_ELEMENT, POST, _E + "/element"),
    CommandDescriptor(Command.FIND_CHILD_ELEMENTS, POST, _E + "/elements"),
    CommandDescriptor(Command.GET_ACTIVE_ELEMENT, POST, _S + "/element/active"),
    CommandDescriptor(Command.EXECUTE_SCRIPT, POST, _S + "/execute"),
    CommandDescriptor(Command.EXECUTE_ASYNC_SCRIPT, POST, _S + "/execute_async"),
    CommandDescriptor(Command.SCREENSHOT, GET, _S + "/screenshot"),
    CommandDescriptor(Command.GET_ALL_COOKIES, GET, _S + "/cookie"),
    CommandDescriptor(Command.ADD_COOKIE, POST, _S + "/cookie"),
    CommandDescriptor(Command.DELETE_ALL_COOKIES, DELETE, _S + "/cookie"),
    CommandDescriptor(Command.DELETE_COOKIE, DELETE, _S + "/cookie/{name}"),
    CommandDescriptor(Command.GET_ALERT_TEXT, GET, _S + "/alert_text"),
    CommandDescriptor(Command.SET_ALERT_TEXT, POST, _S + "/alert_text"),
    CommandDescriptor(Command.ACCEPT_ALERT, POST, _S + "/accept_alert"),
    CommandDescriptor(Command.DISMISS_ALERT, POST, _S + "/dismiss_alert"),
    CommandDescriptor(Command.CLICK_ELEMENT, POST, _E + "/click"),
    CommandDescriptor(Command.SEND_KEYS_TO_ELEMENT, POST, _E + "/value"),
    CommandDescriptor(Command.CLEAR_ELEMENT, POST, _E + "/clear"),
    CommandDescriptor(Command.SUBMIT_ELEMENT, POST, _E + "/submit"),
    CommandDescriptor(Command.GET_ELEMENT_TEXT, GET, _E + "/text"),
    CommandDescriptor(Command.GET_ELEMENT_TAG_NAME, GET, _E + "/name"),
    CommandDescriptor(Command.GET_ELEMENT_ATTRIBUTE, GET, _E + "/attribute/{name}"),
    CommandDescriptor(Command.GET_ELEMENT_CSS_PROPERTY, GET, _E + "/css/{propertyName}"),
    CommandDescriptor(Command.IS_ELEMENT_SELECTED, GET, _E + "/selected"),
    CommandDescriptor(Command.IS_ELEMENT_ENABLED, GET, _E + "/enabled"),
    CommandDescriptor(Command.IS_ELEMENT_DISPLAYED, GET, _E + "/displayed"),
    CommandDescriptor(Command.GET_ELEMENT_LOCATION, GET, _E + "/location"),
    CommandDescriptor(Command.GET_ELEMENT_LOCATION_IN_VIEW, GET, _E + "/location_in_view"),
    CommandDescriptor(Command.GET_ELEMENT_SIZE, GET, _E + "/size"),
)

COMMANDS: MappingProxyType[str, CommandDescriptor] = MappingProxyType({cmd.name: cmd for cmd in _TABLE})


__all__ = ["COMMANDS", "DELETE", "GET", "POST", "Command", "CommandDescriptor"]
