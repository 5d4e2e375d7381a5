"""
Shared fixtures: an in-process fake protocol peer and the fixture site.

The fake peer speaks the JSON wire protocol over real HTTP (http.server) and
keeps a tiny simulated page model per session, so the client is exercised
end-to-end without a browser. The fixture site serves the HTML pages the live
integration tests drive a real browser through.
"""

from __future__ import annotations

import base64
import json
import re
import socket
import uuid
from collections.abc import Generator
from contextlib import closing
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, HTTPServer
from io import BytesIO
from threading import Thread
from typing import Any
from urllib.parse import parse_qs, unquote, urlsplit

import pytest
from PIL import Image

HOME_PAGE = """
<html>
<head>
	<title>Go Selenium Test Suite</title>
</head>
<body>
	The home page. <br />
	<form action="/search">
		<input name="q" /> <input type="submit" id="submit"/> <br />
		<input id="chuk" type="checkbox" /> A checkbox.
	</form>
</body>
</html>
"""

OTHER_PAGE = """
<html>
<head>
	<title>Go Selenium Test Suite - Other Page</title>
</head>
<body>
	The other page.
</body>
</html>
"""

SEARCH_PAGE = """
<html>
<head>
	<title>Go Selenium Test Suite - Search Page</title>
</head>
<body>
	You searched for "{query}". I'll pretend I've found:
	<p>
	"The Go Programming Language"
	</p>
</body>
</html>
"""

PAGE_TITLES = {
    "/": "Go Selenium Test Suite",
    "/other": "Go Selenium Test Suite - Other Page",
    "/search": "Go Selenium Test Suite - Search Page",
}

FIXTURE_COOKIES = [(f"cookie-{i}", f"value-{i}") for i in range(3)]


def _free_port() -> int:
    with closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


def _render_page(url: str) -> str:
    parts = urlsplit(url)
    path = parts.path or "/"
    if path == "/other":
        return OTHER_PAGE
    if path == "/search":
        query = parse_qs(parts.query).get("q", [""])[0]
        return SEARCH_PAGE.replace("{query}", query)
    return HOME_PAGE


def _png_bytes() -> bytes:
    buf = BytesIO()
    Image.new("RGB", (4, 3), color=(200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════════
# FAKE PEER
# ═══════════════════════════════════════════════════════════════════════════════

# Nodes of the home page form: key -> attributes.
_HOME_NODES: dict[str, dict[str, Any]] = {
    "q": {"tag": "input", "id": None, "name": "q", "type": "text", "maxlength": 10, "required": True},
    "submit": {"tag": "input", "id": "submit", "name": None, "type": "submit"},
    "chuk": {"tag": "input", "id": "chuk", "name": None, "type": "checkbox"},
}


@dataclass
class FakeSession:
    id: str
    capabilities: dict[str, Any]
    history: list[str] = field(default_factory=list)
    index: int = -1
    cookies: list[dict[str, Any]] = field(default_factory=list)
    element_ids: dict[str, str] = field(default_factory=dict)
    query: str = ""
    checked: bool = False
    timeouts: dict[str, Any] = field(default_factory=dict)
    windows: dict[str, dict[str, float]] = field(default_factory=lambda: {"window-1": {"width": 1024, "height": 768}})
    window: str = "window-1"
    frames: list[Any] = field(default_factory=list)
    alert: str | None = None
    alert_input: str | None = None

    @property
    def url(self) -> str:
        if self.index < 0:
            return "about:blank"
        return self.history[self.index]

    def navigate(self, url: str) -> None:
        del self.history[self.index + 1 :]
        self.history.append(url)
        self.index = len(self.history) - 1
        self.query = ""
        self.checked = False
        if url.startswith("http"):
            for name, value in FIXTURE_COOKIES:
                if not any(c["name"] == name for c in self.cookies):
                    self.cookies.append({"name": name, "value": value, "path": "/", "secure": False})

    def page_path(self) -> str:
        if not self.url.startswith("http"):
            return ""
        return urlsplit(self.url).path or "/"

    def nodes(self) -> dict[str, dict[str, Any]]:
        return _HOME_NODES if self.page_path() == "/" else {}

    def element_id(self, key: str) -> str:
        if key not in self.element_ids:
            self.element_ids[key] = f"{self.id[:6]}-{uuid.uuid4().hex[:8]}"
        return self.element_ids[key]

    def node_for(self, element_id: str) -> str | None:
        for key, eid in self.element_ids.items():
            if eid == element_id:
                return key
        return None


def _ok(value: Any = None, session_id: str | None = None) -> dict[str, Any]:
    return {"sessionId": session_id, "status": 0, "value": value}


def _fail(status: int, message: str, session_id: str | None = None) -> dict[str, Any]:
    return {"sessionId": session_id, "status": status, "value": {"message": message}}


class FakeRemote:
    """Just enough of a wire-protocol peer for the client's round trips."""

    prefix = "/wd/hub"

    def __init__(self) -> None:
        self.sessions: dict[str, FakeSession] = {}
        self.requests: list[tuple[str, str, dict[str, Any] | None]] = []
        self.screenshot_png = _png_bytes()
        self.url = ""

    # HTTP entry point

    def handle(self, method: str, raw_path: str, raw_body: bytes) -> tuple[int, Any]:
        path = urlsplit(raw_path).path
        body: dict[str, Any] | None = None
        if raw_body:
            body = json.loads(raw_body.decode("utf-8"))
        self.requests.append((method, path, body))

        if not path.startswith(self.prefix):
            return 404, b"Not Found"
        path = path[len(self.prefix) :] or "/"

        if path == "/status" and method == "GET":
            return 200, _ok(
                {
                    "os": {"name": "Linux", "arch": "amd64", "version": "6.1"},
                    "build": {"version": "fake-1.0", "revision": "abc123", "time": "2024-01-01"},
                    "java": {"version": "17"},
                }
            )
        if path == "/session" and method == "POST":
            return self._new_session(body or {})

        m = re.match(r"^/session/([^/]+)(/.*)?$", path)
        if not m:
            return 404, b"Unknown command"
        sid = unquote(m.group(1))
        rest = m.group(2) or ""
        sess = self.sessions.get(sid)
        if sess is None:
            return 404, _fail(6, f"No active session with ID {sid}", sid)

        if rest == "":
            if method == "GET":
                return 200, _ok(sess.capabilities, sid)
            if method == "DELETE":
                del self.sessions[sid]
                return 200, _ok(None, sid)

        em = re.match(r"^/element/([^/]+)(/.*)$", rest)
        if em and em.group(1) != "active":
            return self._element_command(sess, method, unquote(em.group(1)), em.group(2), body or {})
        return self._session_command(sess, method, rest, body or {})

    # Commands

    def _new_session(self, body: dict[str, Any]) -> tuple[int, Any]:
        desired = body.get("desiredCapabilities")
        if not isinstance(desired, dict):
            return 400, _fail(13, "desiredCapabilities missing")
        if desired.get("rejectMe"):
            return 500, _fail(33, "Capabilities were rejected")
        sid = uuid.uuid4().hex
        caps = dict(desired)
        caps.pop("extraneous", None)
        caps.setdefault("platform", "LINUX")
        caps["javascriptEnabled"] = True
        self.sessions[sid] = FakeSession(id=sid, capabilities=caps)
        return 200, _ok(caps, sid)

    def _session_command(self, sess: FakeSession, method: str, rest: str, body: dict[str, Any]) -> tuple[int, Any]:
        sid = sess.id
        route = (method, rest)

        if route == ("POST", "/url"):
            sess.navigate(str(body.get("url")))
            return 200, _ok(None, sid)
        if route == ("GET", "/url"):
            return 200, _ok(sess.url, sid)
        if route == ("POST", "/back"):
            sess.index = max(0, sess.index - 1) if sess.index >= 0 else -1
            return 200, _ok(None, sid)
        if route == ("POST", "/forward"):
            sess.index = min(len(sess.history) - 1, sess.index + 1)
            return 200, _ok(None, sid)
        if route == ("POST", "/refresh"):
            return 200, _ok(None, sid)
        if route == ("GET", "/title"):
            return 200, _ok(PAGE_TITLES.get(sess.page_path(), ""), sid)
        if route == ("GET", "/source"):
            return 200, _ok(_render_page(sess.url) if sess.page_path() else "<html></html>", sid)

        if route in {("POST", "/timeouts/async_script"), ("POST", "/timeouts/implicit_wait"), ("POST", "/timeouts")}:
            if not isinstance(body.get("ms"), (int, float)):
                return 400, _fail(13, "ms missing", sid)
            sess.timeouts[rest] = body["ms"]
            return 200, _ok(None, sid)

        if route == ("GET", "/window_handle"):
            return 200, _ok(sess.window, sid)
        if route == ("GET", "/window_handles"):
            return 200, _ok(list(sess.windows), sid)
        if route == ("POST", "/window"):
            name = body.get("name")
            if name not in sess.windows:
                return 404, _fail(23, f"Unable to locate window: {name}", sid)
            sess.window = name
            return 200, _ok(None, sid)
        if route == ("DELETE", "/window"):
            sess.windows.pop(sess.window, None)
            return 200, _ok(None, sid)
        wm = re.match(r"^/window/([^/]+)/(size|maximize)$", rest)
        if wm:
            handle = sess.window if wm.group(1) == "current" else unquote(wm.group(1))
            if handle not in sess.windows:
                return 404, _fail(23, f"Unable to locate window: {handle}", sid)
            size = sess.windows[handle]
            if method == "GET" and wm.group(2) == "size":
                return 200, _ok(size, sid)
            if method == "POST" and wm.group(2) == "size":
                if not all(isinstance(body.get(k), (int, float)) for k in ("width", "height")):
                    return 400, _fail(13, "width/height missing", sid)
                size.update(width=body["width"], height=body["height"])
                return 200, _ok(None, sid)
            if method == "POST" and wm.group(2) == "maximize":
                size.update(width=1920, height=1080)
                return 200, _ok(None, sid)

        if route == ("POST", "/frame"):
            if "id" not in body:
                return 400, _fail(13, "id missing", sid)
            if body["id"] == "missing":
                return 404, _fail(8, "Unable to locate frame: missing", sid)
            sess.frames.append(body["id"])
            return 200, _ok(None, sid)

        if route in {("POST", "/element"), ("POST", "/elements")}:
            return self._find(sess, body, many=rest == "/elements")
        if route == ("POST", "/element/active"):
            return 200, _ok({"ELEMENT": sess.element_id("q")}, sid)

        if route == ("POST", "/execute"):
            return self._execute(sess, body)
        if route == ("POST", "/execute_async"):
            # The callback is the last argument; report the first one through it.
            args = body.get("args") or []
            return 200, _ok(args[0] if args else None, sid)

        if route == ("GET", "/screenshot"):
            return 200, _ok(base64.b64encode(self.screenshot_png).decode("ascii"), sid)

        if route == ("GET", "/cookie"):
            return 200, _ok(list(sess.cookies), sid)
        if route == ("POST", "/cookie"):
            cookie = body.get("cookie")
            if not isinstance(cookie, dict) or not cookie.get("name"):
                return 400, _fail(25, "Unable to set cookie", sid)
            sess.cookies = [c for c in sess.cookies if c["name"] != cookie["name"]]
            sess.cookies.append(dict(cookie))
            return 200, _ok(None, sid)
        if route == ("DELETE", "/cookie"):
            sess.cookies.clear()
            return 200, _ok(None, sid)
        if method == "DELETE" and rest.startswith("/cookie/"):
            name = unquote(rest[len("/cookie/") :])
            sess.cookies = [c for c in sess.cookies if c["name"] != name]
            return 200, _ok(None, sid)

        if route == ("GET", "/alert_text"):
            if sess.alert is None:
                return 200, _fail(27, "No alert is present", sid)
            return 200, _ok(sess.alert, sid)
        if route == ("POST", "/alert_text"):
            if sess.alert is None:
                return 200, _fail(27, "No alert is present", sid)
            sess.alert_input = body.get("text")
            return 200, _ok(None, sid)
        if route in {("POST", "/accept_alert"), ("POST", "/dismiss_alert")}:
            if sess.alert is None:
                return 200, _fail(27, "No alert is present", sid)
            sess.alert = None
            return 200, _ok(None, sid)

        return 404, b"Unknown command"

    def _find(self, sess: FakeSession, body: dict[str, Any], *, many: bool) -> tuple[int, Any]:
        using = body.get("using")
        value = body.get("value")
        keys: list[str] = []
        for key, node in sess.nodes().items():
            if using == "id" and node["id"] == value:
                keys.append(key)
            elif using == "name" and node["name"] == value:
                keys.append(key)
            elif using == "tag name" and node["tag"] == value:
                keys.append(key)
            elif using == "css selector" and (value == f"#{node['id']}" or value == node["tag"]):
                keys.append(key)
        refs = [{"ELEMENT": sess.element_id(k)} for k in keys]
        if many:
            return 200, _ok(refs, sess.id)
        if not refs:
            return 404, _fail(7, f"Unable to locate element: {value}", sess.id)
        return 200, _ok(refs[0], sess.id)

    def _execute(self, sess: FakeSession, body: dict[str, Any]) -> tuple[int, Any]:
        script = body.get("script")
        args = body.get("args") or []
        if script == "return arguments[0] + arguments[1]":
            return 200, _ok(args[0] + args[1], sess.id)
        if script == "return document.title":
            return 200, _ok(PAGE_TITLES.get(sess.page_path(), ""), sess.id)
        if script == "return arguments[0]":
            return 200, _ok(args[0], sess.id)
        if script == "window.open()":
            sess.windows[f"window-{len(sess.windows) + 1}"] = {"width": 1024, "height": 768}
            return 200, _ok(None, sess.id)
        if script == "alert(arguments[0])":
            sess.alert = str(args[0])
            sess.alert_input = None
            return 200, _ok(None, sess.id)
        if script == "throw":
            return 500, _fail(17, "boom", sess.id)
        return 200, _ok(None, sess.id)

    def _element_command(
        self, sess: FakeSession, method: str, element_id: str, rest: str, body: dict[str, Any]
    ) -> tuple[int, Any]:
        sid = sess.id
        key = sess.node_for(element_id)
        if key is None or key not in sess.nodes():
            return 404, _fail(10, f"Element {element_id} is stale or unknown", sid)
        node = sess.nodes()[key]
        route = (method, rest)

        if route == ("POST", "/click"):
            if key == "chuk":
                sess.checked = not sess.checked
            elif key == "submit":
                sess.navigate(f"{sess.url.rstrip('/')}/search?q={sess.query}")
            return 200, _ok(None, sid)
        if route == ("POST", "/value"):
            text = "".join(body.get("value") or [])
            if key == "q":
                submit = text.endswith("\n")
                sess.query += text.rstrip("\n")
                if submit:
                    sess.navigate(f"{sess.url.rstrip('/')}/search?q={sess.query}")
            return 200, _ok(None, sid)
        if route == ("POST", "/submit"):
            sess.navigate(f"{sess.url.rstrip('/')}/search?q={sess.query}")
            return 200, _ok(None, sid)
        if route == ("POST", "/clear"):
            if key == "q":
                sess.query = ""
            return 200, _ok(None, sid)
        if route == ("GET", "/selected"):
            return 200, _ok(key == "chuk" and sess.checked, sid)
        if route in {("GET", "/enabled"), ("GET", "/displayed")}:
            return 200, _ok(True, sid)
        if route == ("GET", "/name"):
            return 200, _ok(node["tag"], sid)
        if route == ("GET", "/text"):
            return 200, _ok("", sid)
        if route == ("GET", "/location"):
            return 200, _ok({"x": 150, "y": 120}, sid)
        if route == ("GET", "/location_in_view"):
            return 200, _ok({"x": 150, "y": 20}, sid)
        if route == ("GET", "/size"):
            return 200, _ok({"width": 60, "height": 22}, sid)
        if method == "GET" and rest.startswith("/attribute/"):
            attr = unquote(rest[len("/attribute/") :])
            return 200, _ok(node.get(attr), sid)
        if method == "GET" and rest.startswith("/css/"):
            return 200, _ok("block", sid)
        if route in {("POST", "/element"), ("POST", "/elements")}:
            return self._find(sess, {"using": "__none__"}, many=rest == "/elements")
        return 404, b"Unknown command"


class _FakeHandler(BaseHTTPRequestHandler):
    def _dispatch(self, method: str) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        raw = self.rfile.read(length) if length else b""
        status, payload = self.server.peer.handle(method, self.path, raw)  # type: ignore[attr-defined]
        if isinstance(payload, bytes):
            data, ctype = payload, "text/plain"
        else:
            data, ctype = json.dumps(payload).encode("utf-8"), "application/json;charset=UTF-8"
        self.send_response(status)
        self.send_header("Content-Type", ctype)
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def do_GET(self) -> None:  # noqa: N802
        self._dispatch("GET")

    def do_POST(self) -> None:  # noqa: N802
        self._dispatch("POST")

    def do_DELETE(self) -> None:  # noqa: N802
        self._dispatch("DELETE")

    def log_message(self, format: str, *args: object) -> None:  # noqa: A003
        return


@pytest.fixture
def fake_remote() -> Generator[FakeRemote, None, None]:
    peer = FakeRemote()
    port = _free_port()
    server = HTTPServer(("127.0.0.1", port), _FakeHandler)
    server.peer = peer  # type: ignore[attr-defined]
    thread = Thread(target=server.serve_forever, daemon=True)
    thread.start()
    peer.url = f"http://127.0.0.1:{port}{FakeRemote.prefix}"
    try:
        yield peer
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=1)


# ═══════════════════════════════════════════════════════════════════════════════
# FIXTURE SITE
# ═══════════════════════════════════════════════════════════════════════════════


class _SiteHandler(BaseHTTPRequestHandler):
    def do_GET(self) -> None:  # noqa: N802
        path = urlsplit(self.path).path
        if path not in PAGE_TITLES:
            self.send_error(404)
            return
        page = _render_page(self.path)
        data = page.encode("utf-8")
        self.send_response(200)
        for name, value in FIXTURE_COOKIES:
            self.send_header("Set-Cookie", f"{name}={value}")
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def log_message(self, format: str, *args: object) -> None:  # noqa: A003
        return


@pytest.fixture(scope="session")
def fixture_site() -> Generator[str, None, None]:
    port = _free_port()
    server = HTTPServer(("127.0.0.1", port), _SiteHandler)
    thread = Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://localhost:{port}/"
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=1)
