"""
Pytest configuration and shared fixtures for announce tests.

Testing Standards:
- All async tests use pytest.mark.asyncio
- The HTTP session is replaced by FakeSession, which records every request
  and answers from canned responses; no test touches the network
- The session bus is replaced by an AsyncMock whose call() returns a reply
"""
import asyncio
from typing import Any, Dict, List, Optional, Tuple, Union
from unittest.mock import AsyncMock, MagicMock

import pytest
from dbus_next import MessageType

from announce.services.transport import TransportContext
from announce.utils.config import AnnounceSettings


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse."""

    def __init__(
        self,
        status: int = 200,
        body: str = "",
        json_data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        delay: float = 0.0
    ):
        self.status = status
        self.body = body
        self.json_data = json_data
        self.headers = headers or {"Content-Type": "application/json"}
        self.delay = delay

    async def text(self) -> str:
        return self.body

    async def json(self, content_type: Optional[str] = "application/json") -> Any:
        return self.json_data


class _RequestContext:
    def __init__(self, result: Union[FakeResponse, Exception]):
        self.result = result

    async def __aenter__(self) -> FakeResponse:
        if isinstance(self.result, Exception):
            raise self.result
        if self.result.delay:
            await asyncio.sleep(self.result.delay)
        return self.result

    async def __aexit__(self, *exc_info) -> bool:
        return False


class FakeSession:
    """
    Records requests and answers them from canned responses.

    Responses are matched by URL substring; the first matching rule wins.
    Unmatched requests get a 204 response.
    """

    def __init__(self):
        self.calls: List[Tuple[str, str, Dict[str, Any]]] = []
        self.rules: List[Tuple[str, Union[FakeResponse, Exception]]] = []
        self.closed = False

    def respond(self, url_part: str, result: Union[FakeResponse, Exception]) -> None:
        self.rules.append((url_part, result))

    def request(self, method: str, url: str, **kwargs) -> _RequestContext:
        self.calls.append((method, url, kwargs))
        for url_part, result in self.rules:
            if url_part in url:
                return _RequestContext(result)
        return _RequestContext(FakeResponse(status=204))

    def get(self, url: str, **kwargs) -> _RequestContext:
        return self.request("GET", url, **kwargs)

    def urls(self) -> List[str]:
        return [url for _, url, _ in self.calls]

    async def close(self) -> None:
        self.closed = True


def make_bus_reply(notification_id: int = 42) -> MagicMock:
    """Create a successful Notify reply."""
    reply = MagicMock()
    reply.message_type = MessageType.METHOD_RETURN
    reply.body = [notification_id]
    reply.error_name = None
    return reply


@pytest.fixture
def settings() -> AnnounceSettings:
    """Settings with defaults only, ignoring any local .env file."""
    return AnnounceSettings(_env_file=None)


@pytest.fixture
def fake_session() -> FakeSession:
    """Recording HTTP session."""
    return FakeSession()


@pytest.fixture
def fake_bus() -> MagicMock:
    """Session bus whose Notify calls return id 42."""
    bus = MagicMock()
    bus.call = AsyncMock(return_value=make_bus_reply(42))
    return bus


@pytest.fixture
def transport(settings, fake_session, fake_bus) -> TransportContext:
    """Transport context backed by the fake session and bus."""
    return TransportContext(settings, session=fake_session, bus=fake_bus)
