"""
Dispatcher for announce.

Sends one portable message to many destinations: routes every destination
URI to its adapter, builds the request, executes it and aggregates the
per-destination outcomes under a fail-fast or best-effort policy.
"""
import asyncio
from typing import List, Optional, Sequence, Union
import aiohttp
import structlog
from dbus_next.aio import MessageBus
from pydantic import BaseModel

from announce.models.message import Message, Upload
from announce.models.request import DispatchPolicy, HttpResult, Outcome
from announce.services.adapters import BaseServiceAdapter, RocketChatAdapter
from announce.services.executor import RequestExecutor
from announce.services.router import ServiceRouter, default_adapters
from announce.services.transport import TransportContext
from announce.utils.config import AnnounceSettings, get_settings
from announce.utils.errors import AnnounceError, NoMatchingSchemaError, WrongSchemeError
from announce.utils.uri import mask_destination

logger = structlog.get_logger()


class Announce:
    """
    Public entry point for sending notifications.

    Owns the shared transport resources; use it as an async context manager
    or call close() when done.

    Usage:
        async with Announce() as announce:
            outcomes = await announce.announce(
                ["discord://123/token", "dbus://"],
                Message.from_text("build finished"),
                policy=DispatchPolicy.BEST_EFFORT
            )
    """

    def __init__(
        self,
        settings: Optional[AnnounceSettings] = None,
        adapters: Optional[Sequence[BaseServiceAdapter]] = None,
        session: Optional[aiohttp.ClientSession] = None,
        bus: Optional[MessageBus] = None
    ):
        """
        Initialize the dispatcher.

        Args:
            settings: Settings (default: global settings)
            adapters: Adapters in registration order (default: built-ins)
            session: Externally managed HTTP session
            bus: Externally managed session-bus connection
        """
        self.settings = settings or get_settings()
        self.router = ServiceRouter(
            adapters if adapters is not None else default_adapters(self.settings)
        )
        self.transport = TransportContext(self.settings, session=session, bus=bus)
        self.executor = RequestExecutor(self.transport)

    async def __aenter__(self) -> "Announce":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Release the HTTP session and bus connection."""
        await self.transport.close()
        logger.debug("Announce closed")

    # =========================================================================
    # Dispatch
    # =========================================================================

    async def announce(
        self,
        destinations: Sequence[str],
        message: Message,
        policy: Optional[DispatchPolicy] = None
    ) -> List[Outcome]:
        """
        Send a message to every destination.

        Under FAIL_FAST destinations are sent one after another and the first
        error is raised; destinations after it are never started and earlier
        deliveries are not undone. Under BEST_EFFORT every destination is
        attempted and failures are recorded in the returned outcomes.

        Args:
            destinations: Destination URIs
            message: Portable message
            policy: Failure policy (default: settings.default_policy)

        Returns:
            One outcome per destination, in input order

        Raises:
            AnnounceError: The first failure, under FAIL_FAST only
        """
        policy = DispatchPolicy(policy or self.settings.default_policy)
        logger.info("Dispatching message",
                   destinations=len(destinations),
                   policy=policy.value)

        if policy == DispatchPolicy.FAIL_FAST:
            return await self._dispatch_fail_fast(destinations, message)
        return await self._dispatch_best_effort(destinations, message)

    async def announce_ignore_errors(self, destinations: Sequence[str], message: Message) -> None:
        """Send a message to every destination, logging and ignoring failures."""
        await self.announce(destinations, message, policy=DispatchPolicy.BEST_EFFORT)

    async def _dispatch_fail_fast(
        self,
        destinations: Sequence[str],
        message: Message
    ) -> List[Outcome]:
        outcomes: List[Outcome] = []
        for index, destination in enumerate(destinations):
            try:
                payload = await self.send(destination, message)
            except AnnounceError as e:
                logger.error("Dispatch aborted",
                            destination=mask_destination(destination),
                            index=index,
                            skipped=len(destinations) - index - 1,
                            error_code=e.error_code,
                            error=e.message)
                raise
            outcomes.append(Outcome.ok(destination, payload))
        return outcomes

    async def _dispatch_best_effort(
        self,
        destinations: Sequence[str],
        message: Message
    ) -> List[Outcome]:
        slots: List[Optional[Outcome]] = [None] * len(destinations)
        semaphore = asyncio.Semaphore(self.settings.max_concurrent_sends)

        async def run(index: int, destination: str) -> None:
            async with semaphore:
                try:
                    payload = await self.send(destination, message)
                    slots[index] = Outcome.ok(destination, payload)
                except AnnounceError as e:
                    logger.warning("encountered an error",
                                  destination=mask_destination(destination),
                                  error_code=e.error_code,
                                  error=e.message)
                    slots[index] = Outcome.failed(destination, e)

        await asyncio.gather(*(run(i, d) for i, d in enumerate(destinations)))

        failed = sum(1 for outcome in slots if outcome is not None and not outcome.success)
        logger.info("Dispatch finished", destinations=len(slots), failed=failed)
        return [outcome for outcome in slots if outcome is not None]

    # =========================================================================
    # Single destinations
    # =========================================================================

    def _route(self, destination: str) -> BaseServiceAdapter:
        adapter = self.router.route(destination)
        if adapter is None:
            scheme = destination.split(':', 1)[0] if ':' in destination else ""
            raise NoMatchingSchemaError(scheme)
        return adapter

    async def send(self, destination: str, message: Message) -> Union[HttpResult, int]:
        """
        Route, build and execute one destination.

        Args:
            destination: Destination URI
            message: Portable message

        Returns:
            HttpResult, or the notification id for the notification bus

        Raises:
            AnnounceError: On any routing, build or transport failure
        """
        adapter = self._route(destination)
        request = await adapter.build_request(self.transport, destination, message)
        return await self.executor.execute(request)

    async def send_native(self, destination: str, native: BaseModel) -> Union[HttpResult, int]:
        """
        Send a service-native message (DiscordMessage, RocketChatMessage or
        DBusMessage) to a destination of the matching service.

        Raises:
            WrongSchemeError: If the message type does not match the routed adapter
        """
        adapter = self._route(destination)
        request = await adapter.build_native_request(self.transport, destination, native)
        return await self.executor.execute(request)

    async def upload(self, destination: str, upload: Upload) -> HttpResult:
        """
        Upload a file to a Rocket.Chat channel.

        Args:
            destination: rocketchat:// or rocketchats:// URI including the channel
            upload: File path, message and description

        Returns:
            Response of the rooms.upload call

        Raises:
            WrongSchemeError: If the destination is not a Rocket.Chat URI
        """
        adapter = self._route(destination)
        if not isinstance(adapter, RocketChatAdapter):
            scheme = destination.split(':', 1)[0]
            raise WrongSchemeError(scheme, RocketChatAdapter.name)

        request = await adapter.build_upload(self.transport, destination, upload)
        return await self.executor.execute(request)
