"""
Rocket.Chat wire models.

chat.postMessage reference:
https://developer.rocket.chat/reference/api/rest-api/endpoints/core-endpoints/chat-endpoints/postmessage
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

IMAGE_ENDINGS = ("png", "tiff", "jpg", "jpeg", "webp", "gif", "bmp")
VIDEO_ENDINGS = ("mp4", "mkv", "webm", "ogv", "avi", "wmv", "mpg", "mpeg", "flv")
AUDIO_ENDINGS = ("mp3", "opus", "oga", "ogg", "wav", "aac", "wma", "flac", "ape", "webm")


class AttachmentField(BaseModel):
    """Allows for "tables" or "columns" to be displayed on messages."""
    short: bool = False
    title: str
    value: str


class Attachment(BaseModel):
    """An attachment to a message."""
    color: Optional[str] = Field(None, description="Color of the left border; any CSS background value")
    text: Optional[str] = None
    ts: Optional[datetime] = None
    thumb_url: Optional[str] = None
    message_link: Optional[str] = None
    collapsed: bool = False
    author_name: Optional[str] = None
    author_link: Optional[str] = None
    author_icon: Optional[str] = None
    title: Optional[str] = None
    title_link: Optional[str] = None
    title_link_download: bool = False
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    audio_url: Optional[str] = None
    fields: List[AttachmentField] = Field(default_factory=list)

    def link(self, url: str) -> "Attachment":
        """
        Attach a URL, picking the media slot from its file extension.

        Images win over videos and videos over audio ("webm" is listed for
        both); anything unrecognised becomes a message link.
        """
        path = url.split('?', 1)[0].split('#', 1)[0].lower()
        if path.endswith(IMAGE_ENDINGS):
            self.image_url = url
        elif path.endswith(VIDEO_ENDINGS):
            self.video_url = url
        elif path.endswith(AUDIO_ENDINGS):
            self.audio_url = url
        else:
            self.message_link = url
        return self


class RocketChatMessage(BaseModel):
    """Body of a chat.postMessage call."""
    channel: str = Field(..., description="#channel, @user or room id")
    text: Optional[str] = None
    alias: Optional[str] = None
    emoji: Optional[str] = None
    avatar: Optional[str] = None
    attachments: List[Attachment] = Field(default_factory=list)

    @classmethod
    def for_channel(cls, channel: str) -> "RocketChatMessage":
        """Create an empty message addressed to a channel name."""
        if not channel.startswith(('#', '@')):
            channel = f"#{channel}"
        return cls(channel=channel)

    def to_payload(self) -> Dict[str, Any]:
        """JSON body with unset optional fields left out."""
        return self.model_dump(mode="json", exclude_none=True)
