"""
Command router: turns a logical operation into one HTTP round trip.

The router holds no session state; one instance can serve every session
created against the same executor.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import quote

from .codec import Envelope, decode_envelope, encode_params
from .commands import COMMANDS, CommandDescriptor
from .config import DEFAULT_EXECUTOR, DriverConfig, normalize_executor
from .errors import ProtocolDecodeError, UnknownOperationError, UnresolvedPlaceholderError
from .http_client import HttpResponse, http_request

logger = logging.getLogger("webdriver.remote.router")

_PLACEHOLDER_RE = re.compile(r"\{([A-Za-z]+)\}")
_TRACE_MAX_CHARS = 300

Transport = Callable[..., HttpResponse]


def _shorten(text: str, limit: int = _TRACE_MAX_CHARS) -> str:
    if len(text) <= limit:
        return text
    return f"{text[:limit]}… ({len(text)} chars)"


def _trace_payload(raw: bytes | None) -> str:
    if not raw:
        return ""
    return _shorten(raw.decode("utf-8", errors="replace"))


class CommandRouter:
    """Dispatch table + HTTP round trip for one executor URL."""

    def __init__(
        self,
        executor: str = DEFAULT_EXECUTOR,
        *,
        timeout: float = 60.0,
        max_bytes: int = 64_000_000,
        trace: bool = False,
        transport: Transport | None = None,
    ) -> None:
        self.executor = normalize_executor(executor)
        self.timeout = timeout
        self.max_bytes = max_bytes
        self.trace = trace
        self._transport: Transport = transport or http_request

    @classmethod
    def from_config(cls, config: DriverConfig, *, transport: Transport | None = None) -> CommandRouter:
        return cls(
            config.executor,
            timeout=config.http_timeout,
            max_bytes=config.http_max_bytes,
            trace=config.trace,
            transport=transport,
        )

    def resolve(
        self,
        command: str,
        session_id: str | None = None,
        element_id: str | None = None,
        path: Mapping[str, Any] | None = None,
    ) -> tuple[CommandDescriptor, str]:
        """Look up a command and substitute its path variables into a full URL."""
        cmd = COMMANDS.get(command)
        if cmd is None:
            raise UnknownOperationError(f"Unknown operation: {command}")

        variables: dict[str, Any] = dict(path or {})
        variables["sessionId"] = session_id
        variables["elementId"] = element_id
        missing: list[str] = []

        def _substitute(match: re.Match[str]) -> str:
            key = match.group(1)
            value = variables.get(key)
            if value is None or value == "":
                missing.append(key)
                return match.group(0)
            return quote(str(value), safe="")

        resolved = _PLACEHOLDER_RE.sub(_substitute, cmd.path)
        if missing:
            names = ", ".join("{" + key + "}" for key in missing)
            raise UnresolvedPlaceholderError(f"{command}: unresolved placeholder(s) {names} in {cmd.path}")
        return cmd, self.executor + resolved

    def execute(
        self,
        command: str,
        session_id: str | None = None,
        element_id: str | None = None,
        params: dict[str, Any] | None = None,
        *,
        path: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Envelope:
        """Send a command and return the decoded success envelope."""
        cmd, url = self.resolve(command, session_id, element_id, path)
        body = encode_params(params) if cmd.has_body else None

        if self.trace:
            logger.info("-> %s %s %s", cmd.method, url, _trace_payload(body))

        resp = self._transport(
            cmd.method,
            url,
            body,
            timeout=self.timeout if timeout is None else timeout,
            max_bytes=self.max_bytes,
        )

        if self.trace:
            logger.info("<- %s %s", resp.status, _trace_payload(resp.body))

        if resp.truncated:
            raise ProtocolDecodeError(f"{command}: response exceeds {self.max_bytes} bytes")
        return decode_envelope(resp.status, resp.body, url)

    def dispatch(
        self,
        command: str,
        session_id: str | None = None,
        element_id: str | None = None,
        params: dict[str, Any] | None = None,
        *,
        path: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Send a command and return the unwrapped envelope value."""
        return self.execute(command, session_id, element_id, params, path=path, timeout=timeout).value

    def __repr__(self) -> str:
        return f"CommandRouter(executor={self.executor!r})"


__all__ = ["CommandRouter", "Transport", "logger"]
