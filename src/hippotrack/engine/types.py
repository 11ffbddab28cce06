"""Engine data types."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from hippotrack.types import FINANCIAL_CATEGORIES, EventCategory

RawEvent: TypeAlias = Mapping[str, Any]
TelemetryRecord: TypeAlias = dict[str, Any]

# Update keys whose body is a Message object
MESSAGE_LIKE_KEYS = frozenset(
    {
        "message",
        "edited_message",
        "channel_post",
        "edited_channel_post",
        "business_message",
        "edited_business_message",
    }
)


@dataclass(frozen=True)
class BotIdentity:
    """Pre-known identity of the bot being observed."""

    id: int | None = None
    username: str | None = None

    @property
    def known(self) -> bool:
        """True when at least one identity field is populated."""
        return self.id is not None or self.username is not None


@dataclass(frozen=True)
class ClassifiedEvent:
    """An update parsed into one tagged variant.

    ``update_key`` is the top-level key the category was derived from and
    ``body`` the mapping found under it. Unrecognized updates keep the first
    mapping-valued entry as their body so identity can still be resolved.
    """

    category: EventCategory
    update_key: str | None = None
    body: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_financial(self) -> bool:
        return self.category in FINANCIAL_CATEGORIES

    @property
    def is_message_like(self) -> bool:
        return self.update_key in MESSAGE_LIKE_KEYS
