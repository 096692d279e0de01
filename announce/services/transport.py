"""
Shared transport resources.

One TransportContext owns the outbound HTTP session and the session-bus
connection used by every destination of an Announce instance. Both are
created on first use and shared read-only afterwards.
"""
import asyncio
from typing import Optional
import aiohttp
import structlog
from dbus_next import BusType
from dbus_next.aio import MessageBus

from announce.utils.config import AnnounceSettings
from announce.utils.errors import TransportError

logger = structlog.get_logger()


class TransportContext:
    """Lazily created HTTP session and notification-bus connection."""

    def __init__(
        self,
        settings: AnnounceSettings,
        session: Optional[aiohttp.ClientSession] = None,
        bus: Optional[MessageBus] = None
    ):
        """
        Initialize the transport context.

        Args:
            settings: Settings providing timeout and user agent
            session: Externally managed HTTP session; not closed by close()
            bus: Externally managed bus connection; not disconnected by close()
        """
        self.settings = settings
        self._session = session
        self._owns_session = session is None
        self._bus = bus
        self._owns_bus = bus is None
        self._bus_lock = asyncio.Lock()

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None:
            headers = {'User-Agent': self.settings.user_agent}
            timeout = aiohttp.ClientTimeout(total=self.settings.http_timeout)
            self._session = aiohttp.ClientSession(headers=headers, timeout=timeout)
            logger.debug("HTTP session created", user_agent=self.settings.user_agent)
        return self._session

    async def get_bus(self) -> MessageBus:
        """
        Get or connect the session bus.

        Raises:
            TransportError: If the session bus cannot be reached
        """
        async with self._bus_lock:
            if self._bus is None:
                try:
                    self._bus = await MessageBus(bus_type=BusType.SESSION).connect()
                except Exception as e:
                    logger.error("Session bus connection failed", error=str(e))
                    raise TransportError("dbus", str(e)) from e
                logger.debug("Session bus connected", unique_name=self._bus.unique_name)
        return self._bus

    async def close(self) -> None:
        """Close owned resources."""
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None if self._owns_session else self._session

        if self._bus is not None and self._owns_bus:
            self._bus.disconnect()
        self._bus = None if self._owns_bus else self._bus
