"""Transport abstraction used by sessions to issue commands."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional


class Bus(ABC):
    """Interface for sending commands to one remote automation session."""

    @abstractmethod
    def send(self, method: str, endpoint: str, body: Optional[Any] = None) -> Any:
        """Send a command and return the decoded ``value`` of the response.

        ``endpoint`` is relative to the session root; an empty string addresses
        the root itself. A ``body`` of ``None`` sends no payload.
        """

    def close(self) -> None:
        """Release transport resources; the remote session is left untouched."""
