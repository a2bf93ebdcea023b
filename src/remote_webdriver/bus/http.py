"""HTTP transport speaking the JSON wire protocol."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional

import httpx

from ..errors import RequestError, SessionNotCreatedError, UnexpectedResponseError
from .base import Bus

LOGGER = logging.getLogger(__name__)

_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


class HTTPBus(Bus):
    """Bus bound to a single remote session URL."""

    def __init__(self, session_url: str, *, client: httpx.Client) -> None:
        self.session_url = session_url.rstrip("/")
        self._client = client

    @classmethod
    def connect(
        cls,
        url: str,
        capabilities: Optional[Mapping[str, Any]] = None,
        *,
        timeout: Optional[float] = 60.0,
        client: Optional[httpx.Client] = None,
    ) -> "HTTPBus":
        """Open a new remote session and return a bus bound to it."""

        owns_client = client is None
        if client is None:
            client = httpx.Client(timeout=timeout, headers=_HEADERS)
        base_url = url.rstrip("/")
        payload = {"desiredCapabilities": dict(capabilities or {})}
        LOGGER.debug("Requesting new session from %s", base_url)
        try:
            body = _request(client, "POST", f"{base_url}/session", payload)
            session_id = _session_id(body)
        except Exception:
            if owns_client:
                client.close()
            raise
        LOGGER.debug("Remote session %s created", session_id)
        return cls(f"{base_url}/session/{session_id}", client=client)

    def send(self, method: str, endpoint: str, body: Optional[Any] = None) -> Any:
        url = f"{self.session_url}/{endpoint}".rstrip("/")
        LOGGER.debug("Sending %s %s", method, url)
        data = _request(self._client, method, url, body)
        if isinstance(data, dict):
            return data.get("value")
        return None

    def close(self) -> None:
        self._client.close()


def _request(client: httpx.Client, method: str, url: str, body: Optional[Any]) -> Any:
    content = None if body is None else json.dumps(body)
    response = client.request(method, url, content=content, headers=_HEADERS)
    if not response.is_success:
        raise RequestError(_error_message(response.text), status_code=response.status_code)
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise UnexpectedResponseError(f"unexpected response: {response.text}") from exc


def _error_message(text: str) -> str:
    try:
        message = json.loads(text)["value"]["message"]
    except (ValueError, KeyError, TypeError):
        return f"request unsuccessful: {text}"
    try:
        message = json.loads(message)["errorMessage"]
    except (ValueError, KeyError, TypeError):
        pass
    return f"request unsuccessful: {message}"


def _session_id(body: Any) -> str:
    session_id = None
    if isinstance(body, dict):
        session_id = body.get("sessionId")
        value = body.get("value")
        if not session_id and isinstance(value, dict):
            session_id = value.get("sessionId")
    if not session_id:
        raise SessionNotCreatedError("failed to retrieve a session ID")
    return str(session_id)
