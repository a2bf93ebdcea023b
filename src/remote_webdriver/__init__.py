"""Client binding for remote browser automation over the JSON wire protocol."""

from .api.element import Element
from .api.session import Session, open_session
from .api.window import Window
from .bus.base import Bus
from .errors import (
    InvalidArgumentError,
    RequestError,
    ScreenshotDecodeError,
    SessionNotCreatedError,
    UnexpectedResponseError,
    WebDriverError,
)
from .models import Cookie, Log, Offset, Selector, SelectorStrategy, x_offset, xy_offset, y_offset

__all__ = [
    "Bus",
    "Cookie",
    "Element",
    "InvalidArgumentError",
    "Log",
    "Offset",
    "RequestError",
    "ScreenshotDecodeError",
    "Selector",
    "SelectorStrategy",
    "Session",
    "SessionNotCreatedError",
    "UnexpectedResponseError",
    "WebDriverError",
    "Window",
    "open_session",
    "x_offset",
    "xy_offset",
    "y_offset",
]
