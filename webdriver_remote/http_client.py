from __future__ import annotations

from dataclasses import dataclass
from http.client import HTTPException
from urllib.error import HTTPError, URLError
from urllib.request import Request, build_opener

from .errors import TransportError

USER_AGENT = "webdriver-remote/1.0"


@dataclass
class HttpResponse:
    status: int
    headers: dict[str, str]
    body: bytes
    truncated: bool = False


def _build_request(method: str, url: str, body: bytes | None) -> Request:
    headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
    if body is not None:
        headers["Content-Type"] = "application/json;charset=UTF-8"
    return Request(url, data=body, headers=headers, method=method)


def _read_capped(resp, max_bytes: int) -> tuple[bytes, bool]:  # noqa: ANN001
    body = resp.read(max_bytes + 1)
    truncated = len(body) > max_bytes
    if truncated:
        body = body[:max_bytes]
    return body, truncated


def http_request(
    method: str,
    url: str,
    body: bytes | None = None,
    *,
    timeout: float = 60.0,
    max_bytes: int = 64_000_000,
) -> HttpResponse:
    """Perform one HTTP round trip; one connection per request.

    HTTP error statuses are returned, not raised: the peer puts error envelopes
    in 4xx/5xx bodies. Only transport failures raise TransportError, including
    a body that stalls or breaks off after the status line.
    """
    req = _build_request(method, url, body)
    opener = build_opener()
    try:
        try:
            with opener.open(req, timeout=timeout) as resp:
                data, truncated = _read_capped(resp, max_bytes)
                return HttpResponse(status=resp.status, headers=dict(resp.headers), body=data, truncated=truncated)
        except HTTPError as exc:
            data, truncated = b"", False
            if exc.fp is not None:
                try:
                    data, truncated = _read_capped(exc, max_bytes)
                finally:
                    exc.close()
            return HttpResponse(status=exc.code, headers=dict(exc.headers or {}), body=data, truncated=truncated)
    except (TimeoutError, URLError, ConnectionError, HTTPException) as exc:
        raise TransportError(f"{method} {url}: {exc}") from exc
