"""Handle for a remote DOM element."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List, Optional, Tuple

from ..errors import UnexpectedResponseError
from ..models import Selector

if TYPE_CHECKING:
    from .session import Session

ELEMENT_KEY = "ELEMENT"
W3C_ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"


@dataclass(frozen=True)
class Element:
    """A remote DOM node, addressed by its opaque ID."""

    id: str
    session: "Session" = field(compare=False, repr=False)

    def send(self, method: str, endpoint: str, body: Optional[Any] = None) -> Any:
        return self.session.send(method, _join("element", self.id, endpoint), body)

    def reference(self) -> dict[str, str]:
        """Return the wire form used to pass this element as a parameter."""

        return {ELEMENT_KEY: self.id}

    def get_element(self, selector: Selector) -> "Element":
        value = self.send("POST", "element", selector.to_payload())
        return Element(element_id(value), self.session)

    def get_elements(self, selector: Selector) -> List["Element"]:
        values = self.send("POST", "elements", selector.to_payload())
        return [Element(element_id(value), self.session) for value in values or []]

    def get_text(self) -> str:
        return self.send("GET", "text")

    def get_name(self) -> str:
        return self.send("GET", "name")

    def get_attribute(self, attribute: str) -> Optional[str]:
        return self.send("GET", f"attribute/{attribute}")

    def get_css(self, property_name: str) -> str:
        return self.send("GET", f"css/{property_name}")

    def click(self) -> None:
        self.send("POST", "click")

    def clear(self) -> None:
        self.send("POST", "clear")

    def value(self, text: str) -> None:
        self.send("POST", "value", {"value": list(text)})

    def submit(self) -> None:
        self.send("POST", "submit")

    def is_selected(self) -> bool:
        return bool(self.send("GET", "selected"))

    def is_displayed(self) -> bool:
        return bool(self.send("GET", "displayed"))

    def is_enabled(self) -> bool:
        return bool(self.send("GET", "enabled"))

    def is_equal_to(self, other: "Element") -> bool:
        return bool(self.send("GET", f"equals/{other.id}"))

    def get_location(self) -> Tuple[int, int]:
        location = self.send("GET", "location") or {}
        return round_coordinate(location.get("x", 0)), round_coordinate(location.get("y", 0))

    def get_size(self) -> Tuple[int, int]:
        size = self.send("GET", "size") or {}
        return round_coordinate(size.get("width", 0)), round_coordinate(size.get("height", 0))


def element_id(value: Any) -> str:
    """Extract the element ID from a wire element reference."""

    if isinstance(value, dict):
        for key in (ELEMENT_KEY, W3C_ELEMENT_KEY):
            if key in value:
                return str(value[key])
    raise UnexpectedResponseError(f"unexpected element reference: {value!r}")


def round_coordinate(value: Any) -> int:
    """Round a wire coordinate half up."""

    return int(float(value) + 0.5)


def _join(*parts: str) -> str:
    return "/".join(part.strip("/") for part in parts if part)
