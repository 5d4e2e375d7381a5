from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import InvalidLocatorError


class By(str, Enum):
    ID = "id"
    NAME = "name"
    CSS_SELECTOR = "css selector"
    LINK_TEXT = "link text"
    PARTIAL_LINK_TEXT = "partial link text"
    TAG_NAME = "tag name"
    CLASS_NAME = "class name"
    XPATH = "xpath"


@dataclass(frozen=True, slots=True)
class Locator:
    strategy: By
    selector: str

    @classmethod
    def of(cls, by: By | str, value: str) -> Locator:
        """Validate a (strategy, selector) pair before it is sent anywhere."""
        try:
            strategy = by if isinstance(by, By) else By(str(by).strip().lower())
        except ValueError as exc:
            allowed = ", ".join(b.value for b in By)
            raise InvalidLocatorError(f"Invalid locator strategy {by!r} (allowed: {allowed})") from exc
        if not isinstance(value, str):
            raise InvalidLocatorError(f"Locator selector must be a string, got {type(value).__name__}")
        return cls(strategy=strategy, selector=value)

    def to_params(self) -> dict[str, Any]:
        return {"using": self.strategy.value, "value": self.selector}


__all__ = ["By", "Locator"]
