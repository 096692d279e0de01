"""
Request and outcome models for announce.

A service adapter turns (destination, message) into a ServiceRequest: either
an HTTP request still to be executed, or the result of an IPC call that was
already made while building. The dispatcher records one Outcome per
destination.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

import aiohttp

from announce.utils.errors import AnnounceError, ErrorKind


class DispatchPolicy(str, Enum):
    """How a batch reacts to a failing destination."""
    FAIL_FAST = "fail_fast"
    BEST_EFFORT = "best_effort"


@dataclass
class HttpRequest:
    """A ready-to-execute HTTP request."""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    json: Optional[Dict[str, Any]] = None
    form: Optional[aiohttp.FormData] = None
    service: str = "http"


@dataclass(frozen=True)
class IpcResult:
    """An IPC call that completed while the request was built."""
    notification_id: int
    service: str = "dbus"


ServiceRequest = Union[HttpRequest, IpcResult]


@dataclass(frozen=True)
class HttpResult:
    """The immediate response of an executed HTTP request."""
    status: int
    headers: Dict[str, str]
    body: str


@dataclass(frozen=True)
class Outcome:
    """Result of sending to one destination."""
    destination: str
    success: bool
    payload: Union[HttpResult, int, None] = None
    error: Optional[AnnounceError] = None

    @classmethod
    def ok(cls, destination: str, payload: Union[HttpResult, int]) -> "Outcome":
        return cls(destination=destination, success=True, payload=payload)

    @classmethod
    def failed(cls, destination: str, error: AnnounceError) -> "Outcome":
        return cls(destination=destination, success=False, error=error)

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        """Kind of the recorded error, None for successful outcomes."""
        if self.error is None:
            return None
        return self.error.kind

    @property
    def detail(self) -> Optional[str]:
        """Human-readable failure detail."""
        return self.error.message if self.error else None
