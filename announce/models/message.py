"""
Portable message models for announce.
Pydantic models for the destination-agnostic message every adapter accepts.
"""
from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class LinkHint(BaseModel):
    """A link that adapters render as an embed or attachment."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["link"] = "link"
    url: str = Field(..., min_length=1, description="Target URL of the link")


class DescriptionHint(BaseModel):
    """Descriptive text that augments the preceding link, or stands alone."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["description"] = "description"
    text: str = Field(..., description="Description text")


Hint = Annotated[Union[LinkHint, DescriptionHint], Field(discriminator="kind")]


class Message(BaseModel):
    """
    Destination-agnostic notification content.

    An empty message is valid; adapters omit whatever is missing.
    """
    model_config = ConfigDict(frozen=True)

    text: Optional[str] = Field(None, description="Main message text")
    hints: List[Hint] = Field(default_factory=list, description="Auxiliary content, in order")
    file_path: Optional[str] = Field(None, description="Local file to upload where supported")

    @classmethod
    def from_text(cls, text: str) -> "Message":
        """Create a text-only message."""
        return cls(text=text)

    @classmethod
    def link(cls, url: str, description: Optional[str] = None) -> "Message":
        """Create a message holding one link, optionally described."""
        hints: List[Union[LinkHint, DescriptionHint]] = [LinkHint(url=url)]
        if description is not None:
            hints.append(DescriptionHint(text=description))
        return cls(hints=hints)

    def with_hint(self, hint: Union[LinkHint, DescriptionHint]) -> "Message":
        """Return a copy of this message with one more hint appended."""
        return self.model_copy(update={"hints": [*self.hints, hint]})

    def first_description(self) -> Optional[str]:
        """Text of the first description hint, if any."""
        for hint in self.hints:
            if isinstance(hint, DescriptionHint):
                return hint.text
        return None


class Upload(BaseModel):
    """A file upload with an accompanying message and description."""
    file_path: str = Field(..., min_length=1, description="Path of the file to upload")
    message: Optional[str] = Field(None, description="Message posted with the file")
    description: Optional[str] = Field(None, description="Description of the file")
