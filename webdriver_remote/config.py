from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any

DEFAULT_EXECUTOR = "http://127.0.0.1:4444/wd/hub"
DEFAULT_BROWSER = "firefox"


def normalize_executor(raw: str | None) -> str:
    executor = (raw or "").strip()
    if not executor:
        return DEFAULT_EXECUTOR
    return executor.rstrip("/")


def _env_flag(raw: str | None) -> bool:
    return (raw or "").strip().lower() in {"1", "true", "yes", "on"}


def _env_capabilities(raw: str | None) -> dict[str, Any]:
    raw = (raw or "").strip()
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except ValueError as exc:
        raise ValueError(f"WEBDRIVER_CAPABILITIES is not valid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise ValueError("WEBDRIVER_CAPABILITIES must be a JSON object")
    return parsed


@dataclass
class DriverConfig:
    executor: str = DEFAULT_EXECUTOR
    browser_name: str = DEFAULT_BROWSER
    http_timeout: float = 60.0
    http_max_bytes: int = 64_000_000
    trace: bool = False
    extra_capabilities: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.executor = normalize_executor(self.executor)

    @classmethod
    def from_env(cls) -> DriverConfig:
        executor = normalize_executor(os.environ.get("WEBDRIVER_EXECUTOR"))
        browser = (os.environ.get("WEBDRIVER_BROWSER") or DEFAULT_BROWSER).strip()
        timeout = float(os.environ.get("WEBDRIVER_HTTP_TIMEOUT", "60"))
        max_bytes = int(os.environ.get("WEBDRIVER_HTTP_MAX_BYTES", "64000000"))
        return cls(
            executor=executor,
            browser_name=browser,
            http_timeout=timeout,
            http_max_bytes=max_bytes,
            trace=_env_flag(os.environ.get("WEBDRIVER_TRACE")),
            extra_capabilities=_env_capabilities(os.environ.get("WEBDRIVER_CAPABILITIES")),
        )

    def desired_capabilities(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        """Capability map sent at session creation.

        `browserName` comes first, then the configured extras, then caller overrides.
        """
        caps: dict[str, Any] = {"browserName": self.browser_name}
        caps.update(self.extra_capabilities)
        if overrides:
            caps.update(overrides)
        return caps
