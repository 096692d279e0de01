"""
Service adapters for announce.

Each adapter turns a destination URI and a portable message into a request
for one service (Discord, Rocket.Chat, desktop notification bus).
"""
from .base_adapter import BaseServiceAdapter
from .discord_adapter import DiscordAdapter
from .rocketchat_adapter import RocketChatAdapter
from .dbus_adapter import DBusAdapter

__all__ = [
    'BaseServiceAdapter',
    'DiscordAdapter',
    'RocketChatAdapter',
    'DBusAdapter',
]
