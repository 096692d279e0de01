"""
Service router.

Holds the ordered adapters compiled into announce and selects the one
owning a destination URI's scheme.
"""
from typing import Iterable, List, Optional
from urllib.parse import urlsplit
import structlog

from announce.services.adapters import (
    BaseServiceAdapter,
    DBusAdapter,
    DiscordAdapter,
    RocketChatAdapter,
)
from announce.utils.config import AnnounceSettings
from announce.utils.errors import ConfigurationError

logger = structlog.get_logger()


def default_adapters(settings: AnnounceSettings) -> List[BaseServiceAdapter]:
    """Create the built-in adapters in registration order."""
    return [
        RocketChatAdapter(),
        DBusAdapter(
            app_name=settings.dbus_app_name,
            app_icon=settings.dbus_app_icon,
            summary=settings.dbus_summary,
            expire_timeout=settings.dbus_expire_timeout,
        ),
        DiscordAdapter(webhook_base=settings.discord_webhook_base),
    ]


class ServiceRouter:
    """
    Ordered adapter registry.

    Schemes must be unique across adapters; an overlap is rejected when the
    router is built.
    """

    def __init__(self, adapters: Iterable[BaseServiceAdapter]):
        """
        Initialize the router.

        Args:
            adapters: Adapters in registration order

        Raises:
            ConfigurationError: If two adapters claim the same scheme
        """
        self._adapters: List[BaseServiceAdapter] = list(adapters)

        owners = {}
        for adapter in self._adapters:
            for scheme in adapter.schemes():
                if scheme in owners:
                    raise ConfigurationError(
                        f"Scheme '{scheme}' claimed by both {owners[scheme]} and {adapter.name}",
                        details={"scheme": scheme, "adapters": [owners[scheme], adapter.name]}
                    )
                owners[scheme] = adapter.name

        logger.debug("Service router ready", schemes=sorted(owners))

    @property
    def adapters(self) -> List[BaseServiceAdapter]:
        """Registered adapters in registration order."""
        return list(self._adapters)

    def schemes(self) -> List[str]:
        """All registered schemes, sorted."""
        return sorted(scheme for adapter in self._adapters for scheme in adapter.schemes())

    def route(self, uri: str) -> Optional[BaseServiceAdapter]:
        """
        Select the adapter for a destination URI.

        Args:
            uri: Destination URI

        Returns:
            The first adapter owning the URI's scheme, None if there is none
        """
        try:
            scheme = urlsplit(uri).scheme
        except ValueError:
            # Malformed URIs are reported by the adapter's own parser
            scheme = uri.split(':', 1)[0].lower() if ':' in uri else ""

        for adapter in self._adapters:
            if adapter.match_scheme(scheme):
                return adapter
        return None
