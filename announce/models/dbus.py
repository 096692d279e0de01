"""
Desktop notification model.

Notification reference: https://specifications.freedesktop.org/notification-spec/notification-spec-latest.html
"""
from typing import Any, Dict, List
from pydantic import BaseModel, Field


class DBusMessage(BaseModel):
    """Arguments of an org.freedesktop.Notifications.Notify call."""
    app_name: str = Field("Announce", description="Formal name of the sending application")
    replaces_id: int = Field(0, ge=0, description="Id of a notification to replace, 0 for none")
    app_icon: str = Field("dialog-information", description="Notification icon name")
    summary: str = Field("Announce", description="Single line overview")
    body: str = Field("", description="Multi-line body; may contain simple markup")
    actions: List[str] = Field(default_factory=list, description="Pairs of action id and label")
    hints: Dict[str, Any] = Field(default_factory=dict, description="Extra data for the server")
    expire_timeout: int = Field(-1, ge=-1, description="Milliseconds; -1 server default, 0 never")
