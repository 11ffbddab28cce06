"""Ordered lookup paths for fields that live in several places.

The same logical field (a timestamp, a sender) sits under a different
nested path depending on the update variant. Each table below is evaluated
first-match-wins.
"""

from collections.abc import Iterable, Mapping
from typing import Any, TypeAlias

LookupPath: TypeAlias = tuple[str, ...]

# Original timestamp of the update, relative to the raw update
TIMESTAMP_PATHS: tuple[LookupPath, ...] = (
    ("message", "date"),
    ("edited_message", "date"),
    ("channel_post", "date"),
    ("edited_channel_post", "date"),
    ("callback_query", "message", "date"),
    ("business_message", "date"),
    ("edited_business_message", "date"),
    ("chat_member", "date"),
    ("my_chat_member", "date"),
    ("chat_join_request", "date"),
    ("message_reaction", "date"),
)

# Senders that may be the bot itself, relative to the raw update
BOT_SENDER_PATHS: tuple[LookupPath, ...] = (
    ("message", "from"),
    ("callback_query", "message", "from"),
    ("business_message", "from"),
)

# Acting user, relative to the classified body
ACTOR_PATHS: tuple[LookupPath, ...] = (
    ("from",),
    ("user",),
    ("sender_chat",),
)

# Chat, relative to the classified body
CHAT_PATHS: tuple[LookupPath, ...] = (
    ("chat",),
    ("message", "chat"),
)


def get_path(node: Any, path: LookupPath) -> Any:
    """Follow ``path`` through nested mappings; None when any step is missing."""
    current = node
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


def first_present(node: Any, paths: Iterable[LookupPath]) -> Any:
    """Value of the first path that resolves to a non-null value."""
    for path in paths:
        value = get_path(node, path)
        if value is not None:
            return value
    return None
