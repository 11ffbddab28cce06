"""Shared enumerations for hippotrack."""

from enum import Enum


class EventCategory(str, Enum):
    """Semantic category of an observed update.

    The set is closed: every update maps to exactly one member, with
    ``UNKNOWN`` as the fallback.
    """

    # Message sub-kinds
    SUCCESSFUL_PAYMENT = "successful_payment"
    INVOICE = "invoice"
    TEXT_MESSAGE = "text_message"
    PHOTO_MESSAGE = "photo_message"
    VIDEO_MESSAGE = "video_message"
    DOCUMENT_MESSAGE = "document_message"
    AUDIO_MESSAGE = "audio_message"
    VOICE_MESSAGE = "voice_message"
    STICKER_MESSAGE = "sticker_message"
    POLL_MESSAGE = "poll_message"
    CONTACT_MESSAGE = "contact_message"
    LOCATION_MESSAGE = "location_message"
    MESSAGE = "message"

    # Other message-like updates
    EDITED_MESSAGE = "edited_message"
    CHANNEL_POST = "channel_post"
    EDITED_CHANNEL_POST = "edited_channel_post"

    # Business accounts
    BUSINESS_CONNECTION = "business_connection"
    BUSINESS_MESSAGE = "business_message"
    EDITED_BUSINESS_MESSAGE = "edited_business_message"
    DELETED_BUSINESS_MESSAGES = "deleted_business_messages"

    # Reactions
    MESSAGE_REACTION = "message_reaction"
    MESSAGE_REACTION_COUNT = "message_reaction_count"

    # Queries
    INLINE_QUERY = "inline_query"
    CHOSEN_INLINE_RESULT = "chosen_inline_result"
    CALLBACK_QUERY = "callback_query"
    SHIPPING_QUERY = "shipping_query"
    PRE_CHECKOUT_QUERY = "pre_checkout_query"

    # Polls
    POLL = "poll"
    POLL_ANSWER = "poll_answer"

    # Chat membership
    MY_CHAT_MEMBER = "my_chat_member"
    CHAT_MEMBER = "chat_member"
    CHAT_JOIN_REQUEST = "chat_join_request"

    UNKNOWN = "unknown"


FINANCIAL_CATEGORIES = frozenset(
    {
        EventCategory.SUCCESSFUL_PAYMENT,
        EventCategory.INVOICE,
        EventCategory.PRE_CHECKOUT_QUERY,
        EventCategory.SHIPPING_QUERY,
    }
)


class Taxonomy(str, Enum):
    """Naming convention used for the exported ``event_type``."""

    DETAILED = "detailed"  # text_message, photo_message, ... plus membership events
    BASIC = "basic"  # plain "message"; membership events not tracked


class FieldKind(str, Enum):
    """How the sanitizer treats a named field."""

    MEDIA = "media"  # reduced to file identifiers
    SENSITIVE = "sensitive"  # value replaced
    GENERIC = "generic"  # recurse / truncate


class DeliveryStatus(str, Enum):
    """Outcome of a single delivery attempt."""

    SENT = "sent"
    FAILED = "failed"
    TIMEOUT = "timeout"
    SERIALIZE_FAILED = "serialize_failed"
