"""
Element references: opaque, session-scoped handles to DOM nodes.

A RemoteElement captures its owning session at construction and cannot be
re-bound; every element operation is routed through that session (same
router, same session id) with the element id substituted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from .codec import as_bool, as_list, as_point, as_size, as_str, element_ref
from .commands import Command
from .locators import By, Locator
from .models import Point, Size

if TYPE_CHECKING:
    from .session import RemoteSession


@runtime_checkable
class WebElement(Protocol):
    """Element operations available on any element handle."""

    @property
    def id(self) -> str: ...

    def click(self) -> None: ...

    def send_keys(self, text: str) -> None: ...

    def clear(self) -> None: ...

    def submit(self) -> None: ...

    def text(self) -> str: ...

    def tag_name(self) -> str: ...

    def get_attribute(self, name: str) -> str | None: ...

    def css_property(self, name: str) -> str: ...

    def is_selected(self) -> bool: ...

    def is_enabled(self) -> bool: ...

    def is_displayed(self) -> bool: ...

    def location(self) -> Point: ...

    def location_in_view(self) -> Point: ...

    def size(self) -> Size: ...

    def find_element(self, by: By | str, value: str) -> WebElement: ...

    def find_elements(self, by: By | str, value: str) -> list[WebElement]: ...


@dataclass(frozen=True)
class RemoteElement:
    session: RemoteSession = field(repr=False)
    id: str

    @property
    def session_id(self) -> str | None:
        return self.session.id

    def _call(self, command: str, params: dict[str, Any] | None = None, *, path: dict[str, Any] | None = None) -> Any:
        return self.session._dispatch(command, params, element_id=self.id, path=path)

    def to_wire(self) -> dict[str, str]:
        return element_ref(self.id)

    # Actions

    def click(self) -> None:
        self._call(Command.CLICK_ELEMENT)

    def send_keys(self, text: str) -> None:
        """Type `text` into the element, one key per character."""
        self._call(Command.SEND_KEYS_TO_ELEMENT, {"value": list(text)})

    def clear(self) -> None:
        self._call(Command.CLEAR_ELEMENT)

    def submit(self) -> None:
        self._call(Command.SUBMIT_ELEMENT)

    # Queries

    def text(self) -> str:
        return as_str(self._call(Command.GET_ELEMENT_TEXT), "text")

    def tag_name(self) -> str:
        return as_str(self._call(Command.GET_ELEMENT_TAG_NAME), "tag name")

    def get_attribute(self, name: str) -> str | None:
        """Attribute value as the page would render it; None when absent.

        Some peers reply with JSON numbers or booleans; those are rendered the
        way JavaScript would (10 rather than 10.0, "true" rather than "True").
        """
        value = self._call(Command.GET_ELEMENT_ATTRIBUTE, path={"name": name})
        if value is None:
            return None
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return value if isinstance(value, str) else str(value)

    def css_property(self, name: str) -> str:
        return as_str(self._call(Command.GET_ELEMENT_CSS_PROPERTY, path={"propertyName": name}), "css property")

    def is_selected(self) -> bool:
        return as_bool(self._call(Command.IS_ELEMENT_SELECTED), "selected")

    def is_enabled(self) -> bool:
        return as_bool(self._call(Command.IS_ELEMENT_ENABLED), "enabled")

    def is_displayed(self) -> bool:
        return as_bool(self._call(Command.IS_ELEMENT_DISPLAYED), "displayed")

    def location(self) -> Point:
        """Document-relative position of the element's top-left corner."""
        return as_point(self._call(Command.GET_ELEMENT_LOCATION), "location")

    def location_in_view(self) -> Point:
        """Viewport-relative position; the peer may scroll the element into view first."""
        return as_point(self._call(Command.GET_ELEMENT_LOCATION_IN_VIEW), "location in view")

    def size(self) -> Size:
        return as_size(self._call(Command.GET_ELEMENT_SIZE), "size")

    # Scoped lookups

    def find_element(self, by: By | str, value: str) -> RemoteElement:
        locator = Locator.of(by, value)
        return self.session._element(self._call(Command.FIND_CHILD_ELEMENT, locator.to_params()))

    def find_elements(self, by: By | str, value: str) -> list[RemoteElement]:
        locator = Locator.of(by, value)
        found = as_list(self._call(Command.FIND_CHILD_ELEMENTS, locator.to_params()), "elements")
        return [self.session._element(item) for item in found]


__all__ = ["RemoteElement", "WebElement"]
