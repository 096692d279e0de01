"""
Base service adapter class.

Defines the interface that all service adapters must implement.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Tuple, Type
from pydantic import BaseModel
import structlog

from announce.models.message import DescriptionHint, LinkHint, Message
from announce.models.request import ServiceRequest
from announce.services.transport import TransportContext
from announce.utils.errors import WrongSchemeError
from announce.utils.uri import extract_fields, parse_destination

logger = structlog.get_logger()

# (link url, description) pairs produced from a hint sequence
HintPair = Tuple[Optional[str], Optional[str]]


class BaseServiceAdapter(ABC):
    """
    Abstract base class for service adapters.

    An adapter owns a fixed set of URI schemes and turns a destination URI
    plus a portable message into a protocol request. Adapters keep no state
    between calls; configuration parsed from a URI lives for one build only.
    """

    #: Display name, also used as the service tag of built requests
    name: str = ""
    #: URI schemes this adapter owns
    SCHEMES: FrozenSet[str] = frozenset()
    #: Key into announce.utils.uri.FIELD_MAPPINGS
    field_mapping: str = ""
    #: Service-native wire model accepted by build_native_request
    native_message_type: Type[BaseModel] = BaseModel

    def schemes(self) -> FrozenSet[str]:
        """Return the URI schemes owned by this adapter."""
        return self.SCHEMES

    def match_scheme(self, scheme: str) -> bool:
        """Return True if the scheme belongs to this adapter."""
        return scheme in self.SCHEMES

    def parse_destination(self, uri: str) -> Dict[str, Any]:
        """
        Validate the scheme and extract configuration from a destination URI.

        Args:
            uri: Destination URI

        Returns:
            Configuration fields per the adapter's field mapping, plus "scheme"

        Raises:
            ParseError: If the URI is malformed
            WrongSchemeError: If the scheme is not owned by this adapter
            MissingFieldError: If a required component is absent
        """
        parts = parse_destination(uri)
        if not self.match_scheme(parts.scheme):
            raise WrongSchemeError(parts.scheme, self.name)

        config = extract_fields(parts, self.field_mapping)
        config["scheme"] = parts.scheme
        return config

    def check_native(self, native: BaseModel) -> None:
        """
        Ensure a native message belongs to this adapter.

        Raises:
            WrongSchemeError: If the model type is not this adapter's wire model
        """
        if not isinstance(native, self.native_message_type):
            raise WrongSchemeError(
                next(iter(sorted(self.SCHEMES)), ""),
                self.name,
                details={"message_type": type(native).__name__}
            )

    @abstractmethod
    async def build_request(
        self,
        transport: TransportContext,
        uri: str,
        message: Message
    ) -> ServiceRequest:
        """
        Build the protocol request for a portable message.

        Args:
            transport: Shared transport resources (for auxiliary calls)
            uri: Destination URI
            message: Portable message

        Returns:
            A request ready to execute, or a completed IPC result
        """
        pass

    @abstractmethod
    async def build_native_request(
        self,
        transport: TransportContext,
        uri: str,
        native: BaseModel
    ) -> ServiceRequest:
        """
        Build the protocol request for a service-native message.

        Args:
            transport: Shared transport resources
            uri: Destination URI
            native: Instance of native_message_type

        Returns:
            A request ready to execute, or a completed IPC result
        """
        pass

    @staticmethod
    def _pair_hints(hints: Sequence[Any]) -> List[HintPair]:
        """
        Group hints into (link, description) pairs, in input order.

        A description directly following a link belongs to that link; any
        other description stands alone. Unknown hint kinds are skipped.

        Args:
            hints: Message hints

        Returns:
            List of (url, description) pairs; either side may be None
        """
        pairs: List[HintPair] = []
        previous_was_link = False

        for hint in hints:
            if isinstance(hint, LinkHint):
                pairs.append((hint.url, None))
                previous_was_link = True
            elif isinstance(hint, DescriptionHint):
                if previous_was_link:
                    url, _ = pairs[-1]
                    pairs[-1] = (url, hint.text)
                else:
                    pairs.append((None, hint.text))
                previous_was_link = False
            else:
                logger.debug("Ignoring unsupported hint", hint=type(hint).__name__)
                previous_was_link = False

        return pairs
