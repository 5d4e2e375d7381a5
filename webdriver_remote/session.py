"""
Remote session: the handle a caller drives a browser through.

Every public operation is one blocking request/response round trip through
the CommandRouter. A session is not safe for concurrent use from several
threads; independent sessions are.

Usage:
    with RemoteSession.open({"browserName": "firefox"}) as session:
        session.get("http://localhost:4793/")
        box = session.find_element(By.NAME, "q")
        box.send_keys("golang\\n")
"""

from __future__ import annotations

import dataclasses
import logging
from contextlib import suppress
from io import BytesIO
from typing import TYPE_CHECKING, Any

from .codec import as_dict, as_list, as_size, as_str, decode_element_id, decode_screenshot
from .commands import Command
from .config import DriverConfig
from .element import RemoteElement
from .errors import (
    CallerContractError,
    ProtocolDecodeError,
    SessionClosedError,
    SessionCreationError,
    WebDriverError,
)
from .locators import By, Locator
from .models import Capabilities, Cookie, Size, Status
from .router import CommandRouter

if TYPE_CHECKING:
    from PIL.Image import Image

logger = logging.getLogger("webdriver.remote.session")

CURRENT_WINDOW = "current"


def _router_for(executor: str | None, config: DriverConfig | None) -> tuple[DriverConfig, CommandRouter]:
    config = config or DriverConfig.from_env()
    if executor:
        config = dataclasses.replace(config, executor=executor)
    return config, CommandRouter.from_config(config)


def remote_status(executor: str | None = None, *, config: DriverConfig | None = None, router: CommandRouter | None = None) -> Status:
    """Query peer health without a session (liveness probing)."""
    if router is None:
        _, router = _router_for(executor, config)
    return Status.from_dict(as_dict(router.dispatch(Command.STATUS), "status"))


class RemoteSession:
    """A server-side automation context identified by an opaque session id."""

    def __init__(self, router: CommandRouter, capabilities: Capabilities | None = None, *, session_id: str | None = None):
        self.router = router
        self._requested: Capabilities = dict(capabilities or {})
        self.id: str | None = session_id
        self._closed = False

    @classmethod
    def open(
        cls,
        capabilities: Capabilities | None = None,
        executor: str | None = None,
        *,
        config: DriverConfig | None = None,
        router: CommandRouter | None = None,
    ) -> RemoteSession:
        """Create a remote session; raises SessionCreationError on rejection."""
        config, default_router = _router_for(executor, config)
        session = cls(router or default_router, config.desired_capabilities(capabilities))
        session.new_session()
        return session

    def __enter__(self) -> RemoteSession:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        if exc_type is None:
            self.close()
            return
        with suppress(WebDriverError):
            self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else ("open" if self.id else "new")
        return f"RemoteSession(id={self.id!r}, executor={self.router.executor!r}, {state})"

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def requested_capabilities(self) -> Capabilities:
        return dict(self._requested)

    # Lifecycle

    def new_session(self) -> str:
        """Perform the session-creation handshake and bind the returned id."""
        if self._closed:
            raise SessionClosedError("Session is closed and cannot be reused")
        if self.id:
            raise CallerContractError(f"Session {self.id} is already open")
        try:
            envelope = self.router.execute(Command.NEW_SESSION, params={"desiredCapabilities": self._requested})
        except WebDriverError as exc:
            raise SessionCreationError(f"Can't start session: {exc}") from exc

        session_id = envelope.session_id
        if not session_id and isinstance(envelope.value, dict):
            nested = envelope.value.get("sessionId")
            session_id = nested if isinstance(nested, str) else None
        if not session_id:
            raise SessionCreationError("Can't start session: peer returned no session id")

        self.id = session_id
        logger.debug("Opened session %s on %s", session_id, self.router.executor)
        return session_id

    def close(self) -> None:
        """Release the remote session (best-effort, idempotent).

        The handle is closed even when the release request fails; the failure is
        still raised to the caller.
        """
        if self._closed:
            logger.debug("Session %s already closed", self.id)
            return
        self._closed = True
        if not self.id:
            return
        try:
            self.router.dispatch(Command.QUIT, self.id)
        except WebDriverError as exc:
            logger.warning("Failed to release session %s: %s", self.id, exc)
            raise
        logger.debug("Closed session %s", self.id)

    def _require_open(self) -> str:
        if self._closed:
            raise SessionClosedError(f"Session {self.id} is closed")
        if not self.id:
            raise SessionClosedError("Session is not open")
        return self.id

    def _dispatch(
        self,
        command: str,
        params: dict[str, Any] | None = None,
        *,
        element_id: str | None = None,
        path: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Any:
        session_id = self._require_open()
        return self.router.dispatch(command, session_id, element_id, params, path=path, timeout=timeout)

    def _element(self, value: Any) -> RemoteElement:
        return RemoteElement(self, decode_element_id(value))

    def _check_owned(self, value: Any) -> None:
        if isinstance(value, RemoteElement):
            if value.session is not self:
                raise CallerContractError(
                    f"Element {value.id} belongs to session {value.session_id}, not {self.id}"
                )
        elif isinstance(value, dict):
            for item in value.values():
                self._check_owned(item)
        elif isinstance(value, (list, tuple)):
            for item in value:
                self._check_owned(item)

    # Peer info

    def status(self) -> Status:
        return remote_status(router=self.router)

    def capabilities(self) -> Capabilities:
        """The peer's authoritative capability set for this session."""
        return as_dict(self._dispatch(Command.GET_CAPABILITIES), "capabilities")

    # Timeouts

    def set_async_script_timeout(self, ms: int) -> None:
        self._dispatch(Command.SET_ASYNC_SCRIPT_TIMEOUT, {"ms": ms})

    def set_implicit_wait_timeout(self, ms: int) -> None:
        self._dispatch(Command.SET_IMPLICIT_WAIT_TIMEOUT, {"ms": ms})

    def set_page_load_timeout(self, ms: int) -> None:
        self._dispatch(Command.SET_TIMEOUTS, {"type": "page load", "ms": ms})

    # Windows and frames

    def current_window_handle(self) -> str:
        return as_str(self._dispatch(Command.GET_CURRENT_WINDOW_HANDLE), "window handle")

    def window_handles(self) -> list[str]:
        handles = as_list(self._dispatch(Command.GET_WINDOW_HANDLES), "window handles")
        return [as_str(h, "window handle") for h in handles]

    def switch_window(self, name: str) -> None:
        self._dispatch(Command.SWITCH_TO_WINDOW, {"name": name})

    def close_window(self) -> None:
        """Close the current window; the session stays open."""
        self._dispatch(Command.CLOSE_WINDOW)

    def window_size(self, handle: str = CURRENT_WINDOW) -> Size:
        return as_size(self._dispatch(Command.GET_WINDOW_SIZE, path={"windowHandle": handle}), "window size")

    def resize_window(self, width: int, height: int, handle: str = CURRENT_WINDOW) -> None:
        self._dispatch(Command.SET_WINDOW_SIZE, {"width": width, "height": height}, path={"windowHandle": handle})

    def maximize_window(self, handle: str = CURRENT_WINDOW) -> None:
        self._dispatch(Command.MAXIMIZE_WINDOW, path={"windowHandle": handle})

    def switch_frame(self, frame: RemoteElement | int | str | None) -> None:
        """Switch to a frame by element, index, name/id, or None for the top document."""
        self._check_owned(frame)
        self._dispatch(Command.SWITCH_TO_FRAME, {"id": frame})

    # Navigation

    def get(self, url: str) -> None:
        self._dispatch(Command.GET, {"url": url})

    def current_url(self) -> str:
        return as_str(self._dispatch(Command.GET_CURRENT_URL), "url")

    def back(self) -> None:
        self._dispatch(Command.GO_BACK)

    def forward(self) -> None:
        self._dispatch(Command.GO_FORWARD)

    def refresh(self) -> None:
        self._dispatch(Command.REFRESH)

    def title(self) -> str:
        return as_str(self._dispatch(Command.GET_TITLE), "title")

    def page_source(self) -> str:
        return as_str(self._dispatch(Command.GET_PAGE_SOURCE), "page source")

    # Elements

    def find_element(self, by: By | str, value: str) -> RemoteElement:
        """Locate one element; raises NoSuchElementError when nothing matches."""
        locator = Locator.of(by, value)
        return self._element(self._dispatch(Command.FIND_ELEMENT, locator.to_params()))

    def find_elements(self, by: By | str, value: str) -> list[RemoteElement]:
        """Locate all matching elements; zero matches is an empty list, not an error."""
        locator = Locator.of(by, value)
        found = as_list(self._dispatch(Command.FIND_ELEMENTS, locator.to_params()), "elements")
        return [self._element(item) for item in found]

    def active_element(self) -> RemoteElement:
        return self._element(self._dispatch(Command.GET_ACTIVE_ELEMENT))

    # Scripts

    def execute_script(self, script: str, args: list[Any] | None = None) -> Any:
        """Run `script` in the page; numbers in the result come back as float."""
        args = list(args or [])
        self._check_owned(args)
        return self._dispatch(Command.EXECUTE_SCRIPT, {"script": script, "args": args})

    def execute_script_async(self, script: str, args: list[Any] | None = None) -> Any:
        args = list(args or [])
        self._check_owned(args)
        return self._dispatch(Command.EXECUTE_ASYNC_SCRIPT, {"script": script, "args": args})

    # Screenshots

    def screenshot(self) -> bytes:
        """Raw image bytes (PNG) of the current viewport."""
        return decode_screenshot(self._dispatch(Command.SCREENSHOT))

    def screenshot_image(self) -> Image:
        from PIL import Image as PILImage

        data = self.screenshot()
        try:
            img = PILImage.open(BytesIO(data))
            img.load()
        except OSError as exc:
            raise ProtocolDecodeError(f"Screenshot is not a readable image: {exc}") from exc
        return img

    # Cookies

    def get_cookies(self) -> list[Cookie]:
        cookies = as_list(self._dispatch(Command.GET_ALL_COOKIES), "cookies")
        return [Cookie.from_dict(as_dict(c, "cookie")) for c in cookies]

    def add_cookie(self, cookie: Cookie | dict[str, Any]) -> None:
        payload = cookie.to_dict() if isinstance(cookie, Cookie) else dict(cookie)
        self._dispatch(Command.ADD_COOKIE, {"cookie": payload})

    def delete_cookie(self, name: str) -> None:
        """Delete one cookie; the peer decides what deleting a missing name means."""
        self._dispatch(Command.DELETE_COOKIE, path={"name": name})

    def delete_all_cookies(self) -> None:
        self._dispatch(Command.DELETE_ALL_COOKIES)

    # Alerts

    def alert_text(self) -> str:
        return as_str(self._dispatch(Command.GET_ALERT_TEXT), "alert text")

    def set_alert_text(self, text: str) -> None:
        self._dispatch(Command.SET_ALERT_TEXT, {"text": text})

    def accept_alert(self) -> None:
        self._dispatch(Command.ACCEPT_ALERT)

    def dismiss_alert(self) -> None:
        self._dispatch(Command.DISMISS_ALERT)


def new_remote(
    capabilities: Capabilities | None = None,
    executor: str | None = None,
    *,
    config: DriverConfig | None = None,
) -> RemoteSession:
    """Open a session against `executor` (or the configured one)."""
    return RemoteSession.open(capabilities, executor, config=config)


__all__ = ["CURRENT_WINDOW", "RemoteSession", "new_remote", "remote_status"]
