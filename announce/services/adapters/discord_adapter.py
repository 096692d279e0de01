"""
Discord webhook service adapter.

Builds execute-webhook requests from discord:// destinations:

    discord://WEBHOOK_ID/WEBHOOK_TOKEN

The id and token are the last two path segments of the URL Discord shows
when a webhook is created.
"""
from typing import Any, Dict
import structlog

from announce.models.discord import DiscordMessage, Embed
from announce.models.message import Message
from announce.models.request import HttpRequest, ServiceRequest
from announce.services.adapters.base_adapter import BaseServiceAdapter
from announce.services.transport import TransportContext

logger = structlog.get_logger()

# Discord embed title limit
MAX_TITLE_LENGTH = 256


class DiscordAdapter(BaseServiceAdapter):
    """
    Discord webhook adapter.

    Message text becomes the webhook content; every link hint becomes its
    own embed, titled and described by a description hint that follows it.
    """

    name = "discord"
    SCHEMES = frozenset({"discord"})
    field_mapping = "discord"
    native_message_type = DiscordMessage

    def __init__(self, webhook_base: str = "https://discord.com/api/webhooks"):
        """
        Initialize the Discord adapter.

        Args:
            webhook_base: Base URL the webhook id and token are appended to
        """
        self.webhook_base = webhook_base.rstrip('/')

    def build_url(self, config: Dict[str, Any]) -> str:
        """Return the webhook URL the message will be sent to."""
        return f"{self.webhook_base}/{config['webhook_id']}/{config['webhook_token']}"

    async def build_request(
        self,
        transport: TransportContext,
        uri: str,
        message: Message
    ) -> ServiceRequest:
        config = self.parse_destination(uri)
        return self._post(config, self.format_message(message))

    async def build_native_request(
        self,
        transport: TransportContext,
        uri: str,
        native: DiscordMessage
    ) -> ServiceRequest:
        self.check_native(native)
        config = self.parse_destination(uri)
        return self._post(config, native)

    def format_message(self, message: Message) -> DiscordMessage:
        """
        Translate a portable message into a webhook body.

        Args:
            message: Portable message

        Returns:
            Discord webhook message
        """
        result = DiscordMessage(content=message.text or None)

        for url, description in self._pair_hints(message.hints):
            embed = Embed(url=url)
            if description:
                embed.title = description.splitlines()[0][:MAX_TITLE_LENGTH] if url else None
                embed.description = description
            result.embeds.append(embed)

        return result

    def _post(self, config: Dict[str, Any], body: DiscordMessage) -> HttpRequest:
        request = HttpRequest(
            method="POST",
            url=self.build_url(config),
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            json=body.to_payload(),
            service=self.name
        )
        logger.debug("Discord request built",
                    webhook_id=config['webhook_id'],
                    embeds=len(body.embeds))
        return request
