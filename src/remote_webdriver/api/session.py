"""Session bound to one remote browser-automation session."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, List, Mapping, Optional, Sequence

from pydantic import TypeAdapter

from ..bus.base import Bus
from ..bus.http import HTTPBus
from ..errors import InvalidArgumentError, ScreenshotDecodeError
from ..models import Cookie, Log, Offset, Selector
from .element import Element, element_id
from .window import Window

LOGGER = logging.getLogger(__name__)


def open_session(
    url: str,
    capabilities: Optional[Mapping[str, Any]] = None,
    *,
    timeout: Optional[float] = 60.0,
) -> "Session":
    """Start a remote session at ``url`` with the given capabilities."""

    bus = HTTPBus.connect(url, capabilities, timeout=timeout)
    LOGGER.info("Opened session %s", bus.session_url)
    return Session(bus)


class Session:
    """Exposes every protocol command of a remote session.

    Each method performs exactly one exchange through the bus. Errors raised by
    the bus are not caught here.
    """

    def __init__(self, bus: Bus) -> None:
        self.bus = bus

    def send(self, method: str, endpoint: str, body: Optional[Any] = None) -> Any:
        return self.bus.send(method, endpoint, body)

    def delete(self) -> None:
        self.send("DELETE", "")
        LOGGER.info("Deleted session")

    def close(self) -> None:
        """Release the transport; the remote session is not touched."""

        self.bus.close()

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info: object) -> None:
        try:
            self.delete()
        finally:
            self.close()

    # Elements and windows

    def get_element(self, selector: Selector) -> Element:
        value = self.send("POST", "element", selector.to_payload())
        return Element(element_id(value), self)

    def get_elements(self, selector: Selector) -> List[Element]:
        values = self.send("POST", "elements", selector.to_payload())
        return [Element(element_id(value), self) for value in values or []]

    def get_active_element(self) -> Element:
        value = self.send("POST", "element/active")
        return Element(element_id(value), self)

    def get_window(self) -> Window:
        window_id = self.send("GET", "window_handle")
        return Window(window_id, self)

    def get_windows(self) -> List[Window]:
        window_ids = self.send("GET", "window_handles")
        return [Window(window_id, self) for window_id in window_ids or []]

    def set_window(self, window: Window) -> None:
        self.send("POST", "window", {"name": window.id})

    def set_window_by_name(self, name: str) -> None:
        self.send("POST", "window", {"name": name})

    def delete_window(self) -> None:
        self.send("DELETE", "window")

    # Cookies

    def get_cookies(self) -> List[Cookie]:
        cookies = self.send("GET", "cookie")
        return [Cookie.model_validate(cookie) for cookie in cookies or []]

    def set_cookie(self, cookie: Optional[Cookie]) -> None:
        if cookie is None:
            raise InvalidArgumentError("nil cookie is invalid")
        self.send("POST", "cookie", {"cookie": cookie.to_payload()})

    def delete_cookie(self, name: str) -> None:
        self.send("DELETE", f"cookie/{name}")

    def delete_cookies(self) -> None:
        self.send("DELETE", "cookie")

    # Navigation and document

    def get_screenshot(self) -> bytes:
        encoded = self.send("GET", "screenshot") or ""
        if not isinstance(encoded, str):
            raise ScreenshotDecodeError(f"invalid base64 screenshot: {encoded!r}")
        # line breaks are allowed inside wrapped base64
        encoded = encoded.replace("\r", "").replace("\n", "")
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ScreenshotDecodeError(f"invalid base64 screenshot: {exc}") from exc

    def get_url(self) -> str:
        return self.send("GET", "url")

    def set_url(self, url: str) -> None:
        self.send("POST", "url", {"url": url})

    def get_title(self) -> str:
        return self.send("GET", "title")

    def get_source(self) -> str:
        return self.send("GET", "source")

    def forward(self) -> None:
        self.send("POST", "forward")

    def back(self) -> None:
        self.send("POST", "back")

    def refresh(self) -> None:
        self.send("POST", "refresh")

    # Pointer, frames and script

    def double_click(self) -> None:
        self.send("POST", "doubleclick")

    def move_to(self, region: Optional[Element] = None, offset: Optional[Offset] = None) -> None:
        """Move the pointer, sending only the anchor and axes that were given."""

        request: dict[str, Any] = {}
        if region is not None:
            # TODO: reject regions that are not element handles
            request["element"] = region.id
        if offset is not None:
            if offset.x is not None:
                request["xoffset"] = offset.x
            if offset.y is not None:
                request["yoffset"] = offset.y
        self.send("POST", "moveto", request)

    def frame(self, frame: Optional[Element] = None) -> None:
        """Switch into ``frame``, or back to the top-level document when absent."""

        frame_id = frame.reference() if frame is not None else None
        self.send("POST", "frame", {"id": frame_id})

    def frame_parent(self) -> None:
        self.send("POST", "frame/parent")

    def execute(
        self,
        script: str,
        arguments: Optional[Sequence[Any]] = None,
        result_type: Any = None,
    ) -> Any:
        """Run ``script`` remotely and return its result.

        When ``result_type`` is given the result is validated into that type.
        """

        request = {"script": script, "args": list(arguments or [])}
        result = self.send("POST", "execute", request)
        if result_type is None:
            return result
        return TypeAdapter(result_type).validate_python(result)

    # Alerts and logs

    def get_alert_text(self) -> str:
        return self.send("GET", "alert_text")

    def set_alert_text(self, text: str) -> None:
        self.send("POST", "alert_text", {"text": text})

    def accept_alert(self) -> None:
        self.send("POST", "accept_alert")

    def dismiss_alert(self) -> None:
        self.send("POST", "dismiss_alert")

    def new_logs(self, log_type: str) -> List[Log]:
        logs = self.send("POST", "log", {"type": log_type})
        return [Log.model_validate(log) for log in logs or []]

    def get_log_types(self) -> List[str]:
        return list(self.send("GET", "log/types") or [])
