"""
announce - send one notification to many services.

Destinations are URIs whose scheme selects the service:

    discord://WEBHOOK_ID/WEBHOOK_TOKEN
    rocketchat[s]://USER:TOKEN@HOST[:PORT]/CHANNEL
    dbus://[APP_NAME@][ICON_NAME][:TIMEOUT]
"""
from announce.version import __version__
from announce.models.message import DescriptionHint, Hint, LinkHint, Message, Upload
from announce.models.request import DispatchPolicy, HttpResult, Outcome
from announce.services.dispatcher import Announce
from announce.utils.errors import AnnounceError, ErrorKind
from announce.utils.logging_config import setup_logging

__all__ = [
    '__version__',
    'Announce',
    'AnnounceError',
    'DescriptionHint',
    'DispatchPolicy',
    'ErrorKind',
    'Hint',
    'HttpResult',
    'LinkHint',
    'Message',
    'Outcome',
    'Upload',
    'setup_logging',
]
