"""
Value objects returned by session and element queries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import ProtocolDecodeError

Capabilities = dict[str, Any]


@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class Cookie:
    """Cookie in a session's jar; no identity beyond its field values."""

    name: str
    value: str
    path: str | None = None
    domain: str | None = None
    secure: bool | None = None
    http_only: bool | None = None
    expiry: float | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "value": self.value}
        if self.path is not None:
            out["path"] = self.path
        if self.domain is not None:
            out["domain"] = self.domain
        if self.secure is not None:
            out["secure"] = self.secure
        if self.http_only is not None:
            out["httpOnly"] = self.http_only
        if self.expiry is not None:
            out["expiry"] = self.expiry
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Cookie:
        expiry = data.get("expiry")
        if expiry is not None:
            if isinstance(expiry, bool) or not isinstance(expiry, (int, float)):
                raise ProtocolDecodeError(f"cookie {data.get('name')!r}: malformed expiry {expiry!r}")
            expiry = float(expiry)
        return cls(
            name=str(data.get("name") or ""),
            value=str(data.get("value") or ""),
            path=data.get("path"),
            domain=data.get("domain"),
            secure=data.get("secure"),
            http_only=data.get("httpOnly"),
            expiry=expiry,
        )


@dataclass(frozen=True, slots=True)
class BuildInfo:
    version: str = ""
    revision: str = ""
    time: str = ""


@dataclass(frozen=True, slots=True)
class OSInfo:
    arch: str = ""
    name: str = ""
    version: str = ""


@dataclass(frozen=True, slots=True)
class Status:
    """Decoded /status reply (peer health and build info)."""

    ready: bool | None = None
    message: str = ""
    build: BuildInfo = field(default_factory=BuildInfo)
    os: OSInfo = field(default_factory=OSInfo)
    java_version: str = ""
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Status:
        build = data.get("build") if isinstance(data.get("build"), dict) else {}
        os_info = data.get("os") if isinstance(data.get("os"), dict) else {}
        java = data.get("java") if isinstance(data.get("java"), dict) else {}
        ready = data.get("ready")
        return cls(
            ready=ready if isinstance(ready, bool) else None,
            message=str(data.get("message") or ""),
            build=BuildInfo(
                version=str(build.get("version") or ""),
                revision=str(build.get("revision") or ""),
                time=str(build.get("time") or ""),
            ),
            os=OSInfo(
                arch=str(os_info.get("arch") or ""),
                name=str(os_info.get("name") or ""),
                version=str(os_info.get("version") or ""),
            ),
            java_version=str(java.get("version") or ""),
            raw=dict(data),
        )


__all__ = ["BuildInfo", "Capabilities", "Cookie", "OSInfo", "Point", "Size", "Status"]
