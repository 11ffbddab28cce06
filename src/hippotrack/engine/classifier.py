"""Event classifier.

Maps an update onto exactly one EventCategory. Rules are evaluated in
order and the first match wins; a message carrying both
``successful_payment`` and ``text`` is a payment, not a text message.
Reordering CLASSIFICATION_RULES changes results for such updates.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from hippotrack.types import EventCategory, Taxonomy

from .types import ClassifiedEvent


@dataclass(frozen=True)
class ClassificationRule:
    """Matches when ``update_key`` is present and, if set, ``body[sub_key]`` too."""

    update_key: str
    category: EventCategory
    sub_key: str | None = None

    def matches(self, update: Mapping[str, Any]) -> bool:
        body = update.get(self.update_key)
        if body is None:
            return False
        if self.sub_key is None:
            return True
        return isinstance(body, Mapping) and body.get(self.sub_key) is not None


CLASSIFICATION_RULES: tuple[ClassificationRule, ...] = (
    # Message sub-kinds, financial first
    ClassificationRule("message", EventCategory.SUCCESSFUL_PAYMENT, "successful_payment"),
    ClassificationRule("message", EventCategory.INVOICE, "invoice"),
    ClassificationRule("message", EventCategory.TEXT_MESSAGE, "text"),
    ClassificationRule("message", EventCategory.PHOTO_MESSAGE, "photo"),
    ClassificationRule("message", EventCategory.VIDEO_MESSAGE, "video"),
    ClassificationRule("message", EventCategory.DOCUMENT_MESSAGE, "document"),
    ClassificationRule("message", EventCategory.AUDIO_MESSAGE, "audio"),
    ClassificationRule("message", EventCategory.VOICE_MESSAGE, "voice"),
    ClassificationRule("message", EventCategory.STICKER_MESSAGE, "sticker"),
    ClassificationRule("message", EventCategory.POLL_MESSAGE, "poll"),
    ClassificationRule("message", EventCategory.CONTACT_MESSAGE, "contact"),
    ClassificationRule("message", EventCategory.LOCATION_MESSAGE, "location"),
    ClassificationRule("message", EventCategory.MESSAGE),
    # Other message-like updates
    ClassificationRule("edited_message", EventCategory.EDITED_MESSAGE),
    ClassificationRule("channel_post", EventCategory.CHANNEL_POST),
    ClassificationRule("edited_channel_post", EventCategory.EDITED_CHANNEL_POST),
    # Business accounts
    ClassificationRule("business_connection", EventCategory.BUSINESS_CONNECTION),
    ClassificationRule("business_message", EventCategory.BUSINESS_MESSAGE),
    ClassificationRule("edited_business_message", EventCategory.EDITED_BUSINESS_MESSAGE),
    ClassificationRule("deleted_business_messages", EventCategory.DELETED_BUSINESS_MESSAGES),
    # Reactions
    ClassificationRule("message_reaction", EventCategory.MESSAGE_REACTION),
    ClassificationRule("message_reaction_count", EventCategory.MESSAGE_REACTION_COUNT),
    # Queries
    ClassificationRule("inline_query", EventCategory.INLINE_QUERY),
    ClassificationRule("chosen_inline_result", EventCategory.CHOSEN_INLINE_RESULT),
    ClassificationRule("callback_query", EventCategory.CALLBACK_QUERY),
    ClassificationRule("shipping_query", EventCategory.SHIPPING_QUERY),
    ClassificationRule("pre_checkout_query", EventCategory.PRE_CHECKOUT_QUERY),
    # Polls
    ClassificationRule("poll", EventCategory.POLL),
    ClassificationRule("poll_answer", EventCategory.POLL_ANSWER),
    # Chat membership
    ClassificationRule("my_chat_member", EventCategory.MY_CHAT_MEMBER),
    ClassificationRule("chat_member", EventCategory.CHAT_MEMBER),
    ClassificationRule("chat_join_request", EventCategory.CHAT_JOIN_REQUEST),
)

# Labels that differ from the category value under the basic taxonomy
_BASIC_LABELS: dict[EventCategory, EventCategory] = {
    EventCategory.TEXT_MESSAGE: EventCategory.MESSAGE,
    EventCategory.PHOTO_MESSAGE: EventCategory.MESSAGE,
    EventCategory.VIDEO_MESSAGE: EventCategory.MESSAGE,
    EventCategory.DOCUMENT_MESSAGE: EventCategory.MESSAGE,
    EventCategory.AUDIO_MESSAGE: EventCategory.MESSAGE,
    EventCategory.VOICE_MESSAGE: EventCategory.MESSAGE,
    EventCategory.STICKER_MESSAGE: EventCategory.MESSAGE,
    EventCategory.POLL_MESSAGE: EventCategory.MESSAGE,
    EventCategory.CONTACT_MESSAGE: EventCategory.MESSAGE,
    EventCategory.LOCATION_MESSAGE: EventCategory.MESSAGE,
    EventCategory.MY_CHAT_MEMBER: EventCategory.UNKNOWN,
    EventCategory.CHAT_MEMBER: EventCategory.UNKNOWN,
    EventCategory.CHAT_JOIN_REQUEST: EventCategory.UNKNOWN,
}


def parse_event(raw_event: Any) -> ClassifiedEvent:
    """Parse an update into its tagged variant.

    Args:
        raw_event: Raw update mapping (anything else is "unknown")

    Returns:
        ClassifiedEvent with category, matched key and body
    """
    if not isinstance(raw_event, Mapping):
        return ClassifiedEvent(EventCategory.UNKNOWN)

    for rule in CLASSIFICATION_RULES:
        if rule.matches(raw_event):
            body = raw_event[rule.update_key]
            return ClassifiedEvent(
                category=rule.category,
                update_key=rule.update_key,
                body=body if isinstance(body, Mapping) else {},
            )

    for key, value in raw_event.items():
        if isinstance(value, Mapping):
            return ClassifiedEvent(EventCategory.UNKNOWN, update_key=key, body=value)

    return ClassifiedEvent(EventCategory.UNKNOWN)


def classify(raw_event: Any) -> EventCategory:
    """Return the category of an update. Total and deterministic."""
    return parse_event(raw_event).category


def label(category: EventCategory, taxonomy: Taxonomy = Taxonomy.DETAILED) -> str:
    """Exported ``event_type`` for a category under the given taxonomy."""
    if Taxonomy(taxonomy) is Taxonomy.BASIC:
        category = _BASIC_LABELS.get(category, category)
    return category.value
