"""Tests for the request executor."""

import asyncio

import aiohttp
import pytest
from structlog.testing import capture_logs

from announce.models.request import HttpRequest, HttpResult, IpcResult
from announce.services.executor import RequestExecutor
from announce.utils.errors import ServiceError, TransportError
from tests.conftest import FakeResponse


@pytest.fixture
def executor(transport):
    return RequestExecutor(transport)


def make_request(url="https://chat.example.com/api/v1/chat.postMessage"):
    return HttpRequest(method="POST", url=url, headers={"x-user-id": "bot"}, json={"text": "hi"}, service="rocketchat")


class TestExecute:
    """Tests for HTTP and IPC execution."""

    @pytest.mark.asyncio
    async def test_ipc_result_passed_through(self, executor, fake_session):
        assert await executor.execute(IpcResult(notification_id=7)) == 7
        assert fake_session.calls == []

    @pytest.mark.asyncio
    async def test_http_success(self, executor, fake_session):
        fake_session.respond("chat.postMessage", FakeResponse(status=200, body='{"success": true}'))

        result = await executor.execute(make_request())

        assert isinstance(result, HttpResult)
        assert result.status == 200
        assert result.body == '{"success": true}'
        method, url, kwargs = fake_session.calls[0]
        assert method == "POST"
        assert kwargs["json"] == {"text": "hi"}
        assert kwargs["data"] is None
        assert kwargs["headers"] == {"x-user-id": "bot"}

    @pytest.mark.asyncio
    async def test_error_status_is_service_error(self, executor, fake_session):
        fake_session.respond("chat.postMessage", FakeResponse(status=401, body="unauthorized"))

        with pytest.raises(ServiceError) as exc_info:
            await executor.execute(make_request())

        assert exc_info.value.details["status"] == 401
        assert exc_info.value.details["service"] == "rocketchat"

    @pytest.mark.asyncio
    async def test_client_error_is_transport_error(self, executor, fake_session):
        fake_session.respond("chat.postMessage", aiohttp.ClientConnectionError("connection refused"))

        with pytest.raises(TransportError) as exc_info:
            await executor.execute(make_request())

        assert exc_info.value.origin == "http"

    @pytest.mark.asyncio
    async def test_timeout_is_transport_error(self, executor, fake_session):
        fake_session.respond("chat.postMessage", asyncio.TimeoutError())

        with pytest.raises(TransportError):
            await executor.execute(make_request())


@pytest.mark.asyncio
async def test_failure_log_masks_auth_headers(executor, fake_session):
    fake_session.respond("chat.postMessage", FakeResponse(status=401, body="unauthorized"))
    request = make_request()
    request.headers["x-auth-token"] = "secret-token"

    with capture_logs() as logs:
        with pytest.raises(ServiceError):
            await executor.execute(request)

    entry = next(log for log in logs if log["event"] == "Service rejected request")
    assert entry["headers"] == {"x-user-id": "bot", "x-auth-token": "***MASKED***"}
