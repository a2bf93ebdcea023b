"""Value objects passed to and returned from session commands."""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SelectorStrategy(str, enum.Enum):
    """Lookup strategies understood by the remote automation server."""

    CSS = "css selector"
    XPATH = "xpath"
    LINK_TEXT = "link text"
    PARTIAL_LINK_TEXT = "partial link text"
    TAG_NAME = "tag name"
    ID = "id"
    NAME = "name"
    CLASS_NAME = "class name"


class Selector(BaseModel):
    """Describes how to locate an element: a strategy plus a value."""

    using: str
    value: str

    @field_validator("using", mode="before")
    @classmethod
    def _strategy_value(cls, value: Any) -> Any:
        if isinstance(value, SelectorStrategy):
            return value.value
        return value

    @classmethod
    def css(cls, value: str) -> "Selector":
        return cls(using=SelectorStrategy.CSS.value, value=value)

    @classmethod
    def xpath(cls, value: str) -> "Selector":
        return cls(using=SelectorStrategy.XPATH.value, value=value)

    def to_payload(self) -> dict[str, str]:
        return self.model_dump()


class Offset(BaseModel):
    """Pointer offset where each axis may be left unspecified."""

    x: Optional[int] = None
    y: Optional[int] = None


def x_offset(x: int) -> Offset:
    return Offset(x=x)


def y_offset(y: int) -> Offset:
    return Offset(y=y)


def xy_offset(x: int, y: int) -> Offset:
    return Offset(x=x, y=y)


class Cookie(BaseModel):
    """A browser cookie as exchanged with the remote server."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    value: Any
    path: Optional[str] = None
    domain: Optional[str] = None
    secure: Optional[bool] = None
    http_only: Optional[bool] = Field(default=None, alias="httpOnly")
    expiry: Optional[float] = Field(default=None, description="Expiry as seconds since epoch.")

    def to_payload(self) -> dict[str, Any]:
        """Return the wire form, leaving out attributes that were never set."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Log(BaseModel):
    """A single log line drained from the remote server."""

    model_config = ConfigDict(extra="allow")

    message: str = ""
    level: str = ""
    timestamp: int = Field(default=0, description="Milliseconds since epoch.")

    @property
    def time(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp / 1000, tz=timezone.utc)
