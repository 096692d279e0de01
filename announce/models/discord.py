"""
Discord webhook wire models.

Execute-webhook reference: https://discord.com/developers/docs/resources/webhook#execute-webhook
Embed reference: https://discord.com/developers/docs/resources/channel#embed-object
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class EmbedFooter(BaseModel):
    """Footer information of an embed."""
    text: str
    icon_url: Optional[str] = None


class EmbedMedia(BaseModel):
    """Image, thumbnail or video information of an embed."""
    url: str
    height: Optional[int] = None
    width: Optional[int] = None


class EmbedProvider(BaseModel):
    """Provider information of an embed."""
    name: Optional[str] = None
    url: Optional[str] = None


class EmbedAuthor(BaseModel):
    """Author information of an embed."""
    name: str
    url: Optional[str] = None
    icon_url: Optional[str] = None


class EmbedField(BaseModel):
    """A name/value column displayed in an embed."""
    name: str
    value: str
    inline: bool = False


class Embed(BaseModel):
    """Rich content embedded in a webhook message."""
    title: Optional[str] = Field(None, max_length=256)
    type: Optional[str] = None
    description: Optional[str] = Field(None, max_length=4096)
    url: Optional[str] = None
    color: Optional[int] = None
    footer: Optional[EmbedFooter] = None
    image: Optional[EmbedMedia] = None
    thumbnail: Optional[EmbedMedia] = None
    video: Optional[EmbedMedia] = None
    provider: Optional[EmbedProvider] = None
    author: Optional[EmbedAuthor] = None
    fields: List[EmbedField] = Field(default_factory=list, max_length=25)


class DiscordMessage(BaseModel):
    """Body of an execute-webhook call."""
    content: Optional[str] = Field(None, description="Message contents (up to 2000 characters)")
    username: Optional[str] = Field(None, description="Override of the webhook's username")
    avatar_url: Optional[str] = Field(None, description="Override of the webhook's avatar")
    tts: bool = False
    embeds: List[Embed] = Field(default_factory=list, max_length=10)
    flags: Optional[int] = Field(None, description="Message flags; only SUPPRESS_EMBEDS can be set")
    thread_name: Optional[str] = Field(None, description="Thread to create in a forum channel")

    def to_payload(self) -> Dict[str, Any]:
        """JSON body with unset optional fields left out."""
        return self.model_dump(mode="json", exclude_none=True)
