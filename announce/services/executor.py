"""
Request executor.

Runs built requests on the shared HTTP session. IPC results were already
delivered while building and are passed through.
"""
import asyncio
from typing import Union
import aiohttp
import structlog

from announce.models.request import HttpRequest, HttpResult, IpcResult, ServiceRequest
from announce.services.transport import TransportContext
from announce.utils.errors import ServiceError, TransportError
from announce.utils.logging_config import mask_sensitive_data

logger = structlog.get_logger()

# Longest piece of an error body kept in error details
MAX_ERROR_BODY = 500


class RequestExecutor:
    """Performs the transport call of a ServiceRequest."""

    def __init__(self, transport: TransportContext):
        self.transport = transport

    async def execute(self, request: ServiceRequest) -> Union[HttpResult, int]:
        """
        Execute a request.

        Args:
            request: Built HTTP request or completed IPC result

        Returns:
            HttpResult for HTTP requests, the notification id for IPC results

        Raises:
            TransportError: On connection, timeout or payload failures
            ServiceError: If the service answers with an error status
        """
        if isinstance(request, IpcResult):
            return request.notification_id

        return await self._execute_http(request)

    async def _execute_http(self, request: HttpRequest) -> HttpResult:
        session = await self.transport.get_session()

        try:
            async with session.request(
                request.method,
                request.url,
                headers=request.headers,
                json=request.json,
                data=request.form
            ) as response:
                body = await response.text()

                if response.status >= 400:
                    logger.error("Service rejected request",
                                service=request.service,
                                status=response.status,
                                headers=mask_sensitive_data(request.headers))
                    raise ServiceError(
                        request.service,
                        f"HTTP {response.status}: {body[:MAX_ERROR_BODY]}",
                        details={"status": response.status}
                    )

                logger.info("Request delivered",
                           service=request.service,
                           status=response.status)
                return HttpResult(
                    status=response.status,
                    headers=dict(response.headers),
                    body=body
                )

        except aiohttp.ClientError as e:
            logger.error("HTTP transport error",
                        service=request.service,
                        headers=mask_sensitive_data(request.headers),
                        error=str(e))
            raise TransportError("http", str(e)) from e
        except asyncio.TimeoutError as e:
            logger.error("HTTP request timed out", service=request.service)
            raise TransportError("http", "request timed out") from e
