"""
Desktop notification adapter.

Sends notifications through the org.freedesktop.Notifications service on
the session bus. Destinations look like:

    dbus://[APP_NAME@][ICON_NAME][:TIMEOUT]

Building and sending are the same IPC call here, so build_request returns
the server-issued notification id.
"""
from typing import Any, Dict
import structlog
from dbus_next import Message as BusMessage, MessageType, Variant

from announce.models.dbus import DBusMessage
from announce.models.message import Message
from announce.models.request import IpcResult, ServiceRequest
from announce.services.adapters.base_adapter import BaseServiceAdapter
from announce.services.transport import TransportContext
from announce.utils.errors import TransportError

logger = structlog.get_logger()

NOTIFICATIONS_BUS_NAME = "org.freedesktop.Notifications"
NOTIFICATIONS_OBJECT_PATH = "/org/freedesktop/Notifications"
NOTIFICATIONS_INTERFACE = "org.freedesktop.Notifications"
NOTIFY_SIGNATURE = "susssasa{sv}i"


def _to_variant(value: Any) -> Variant:
    """Wrap a plain hint value in a variant of the matching D-Bus type."""
    if isinstance(value, Variant):
        return value
    if isinstance(value, bool):
        return Variant('b', value)
    if isinstance(value, int):
        return Variant('i', value)
    if isinstance(value, (bytes, bytearray)):
        return Variant('ay', bytes(value))
    return Variant('s', str(value))


class DBusAdapter(BaseServiceAdapter):
    """
    Notification-bus adapter.

    Message text becomes the notification body and the first description
    hint its summary. Link hints have no notification counterpart and are
    ignored.
    """

    name = "dbus"
    SCHEMES = frozenset({"dbus"})
    field_mapping = "dbus"
    native_message_type = DBusMessage

    def __init__(
        self,
        app_name: str = "Announce",
        app_icon: str = "dialog-information",
        summary: str = "Announce",
        expire_timeout: int = -1
    ):
        """
        Initialize the adapter.

        Args:
            app_name: Application name used when the URI carries none
            app_icon: Icon name used when the URI carries none
            summary: Summary used when the message carries no description
            expire_timeout: Expiry in ms used when the URI carries none
        """
        self.app_name = app_name
        self.app_icon = app_icon
        self.summary = summary
        self.expire_timeout = expire_timeout

    async def build_request(
        self,
        transport: TransportContext,
        uri: str,
        message: Message
    ) -> ServiceRequest:
        config = self.parse_destination(uri)
        return await self.notify(transport, self.format_message(message, config))

    async def build_native_request(
        self,
        transport: TransportContext,
        uri: str,
        native: DBusMessage
    ) -> ServiceRequest:
        self.check_native(native)
        self.parse_destination(uri)
        return await self.notify(transport, native)

    def format_message(self, message: Message, config: Dict[str, Any]) -> DBusMessage:
        """
        Translate a portable message into Notify arguments.

        URI values take precedence over the adapter defaults.
        """
        expire_timeout = config.get("expire_timeout")
        return DBusMessage(
            app_name=config.get("app_name") or self.app_name,
            app_icon=config.get("app_icon") or self.app_icon,
            summary=message.first_description() or self.summary,
            body=message.text or "",
            expire_timeout=self.expire_timeout if expire_timeout is None else expire_timeout,
        )

    async def notify(self, transport: TransportContext, message: DBusMessage) -> IpcResult:
        """
        Call Notify on the notification service.

        Args:
            transport: Shared transport resources holding the bus connection
            message: Notify arguments

        Returns:
            IpcResult carrying the notification id

        Raises:
            TransportError: If the bus is unreachable or the call fails
        """
        bus = await transport.get_bus()

        call = BusMessage(
            destination=NOTIFICATIONS_BUS_NAME,
            path=NOTIFICATIONS_OBJECT_PATH,
            interface=NOTIFICATIONS_INTERFACE,
            member="Notify",
            signature=NOTIFY_SIGNATURE,
            body=[
                message.app_name,
                message.replaces_id,
                message.app_icon,
                message.summary,
                message.body,
                list(message.actions),
                {key: _to_variant(value) for key, value in message.hints.items()},
                message.expire_timeout,
            ]
        )

        try:
            reply = await bus.call(call)
        except Exception as e:
            logger.error("Notify call failed", error=str(e))
            raise TransportError("dbus", str(e)) from e

        if reply is None:
            logger.error("Notify call got no reply")
            raise TransportError("dbus", "no reply from the notification service")

        if reply.message_type == MessageType.ERROR:
            reason = reply.body[0] if reply.body else ""
            logger.error("Notify call rejected", error_name=reply.error_name, error=reason)
            raise TransportError("dbus", f"{reply.error_name}: {reason}")

        notification_id = int(reply.body[0])
        logger.info("Desktop notification sent",
                   app_name=message.app_name,
                   notification_id=notification_id)
        return IpcResult(notification_id=notification_id)
