"""Factories for constructing transports and sessions from configuration."""

from __future__ import annotations

from .api.session import Session
from .bus.http import HTTPBus
from .config import ClientConfig


def build_bus(config: ClientConfig) -> HTTPBus:
    return HTTPBus.connect(config.url, config.capabilities, timeout=config.timeout)


def build_session(config: ClientConfig) -> Session:
    return Session(build_bus(config))
