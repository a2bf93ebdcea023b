"""Handle for a remote browser window."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Tuple

from .element import round_coordinate

if TYPE_CHECKING:
    from .session import Session


@dataclass(frozen=True)
class Window:
    """A remote browser window or tab, addressed by its handle."""

    id: str
    session: "Session" = field(compare=False, repr=False)

    def send(self, method: str, endpoint: str, body: Optional[Any] = None) -> Any:
        return self.session.send(method, f"window/{self.id}/{endpoint}", body)

    def set_size(self, width: int, height: int) -> None:
        self.send("POST", "size", {"width": width, "height": height})

    def get_size(self) -> Tuple[int, int]:
        size = self.send("GET", "size") or {}
        return round_coordinate(size.get("width", 0)), round_coordinate(size.get("height", 0))

    def maximize(self) -> None:
        self.send("POST", "maximize")
