"""In-memory bus for tests and offline use."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .base import Bus


@dataclass(frozen=True)
class BusCall:
    """A command recorded by :class:`ScriptedBus`."""

    method: str
    endpoint: str
    body: Optional[Any] = None


class ScriptedBus(Bus):
    """Replay canned responses keyed by ``(method, endpoint)``.

    A canned value that is an exception instance is raised instead of returned.
    Unscripted commands return ``None``.
    """

    def __init__(self, responses: Optional[Mapping[tuple[str, str], Any]] = None) -> None:
        self._responses: dict[tuple[str, str], Any] = dict(responses or {})
        self.calls: list[BusCall] = []

    def respond(self, method: str, endpoint: str, value: Any) -> None:
        self._responses[(method, endpoint)] = value

    def send(self, method: str, endpoint: str, body: Optional[Any] = None) -> Any:
        self.calls.append(BusCall(method=method, endpoint=endpoint, body=copy.deepcopy(body)))
        response = self._responses.get((method, endpoint))
        if isinstance(response, BaseException):
            raise response
        return copy.deepcopy(response)

    @property
    def last_call(self) -> BusCall:
        if not self.calls:
            raise RuntimeError("ScriptedBus has not received any commands")
        return self.calls[-1]
