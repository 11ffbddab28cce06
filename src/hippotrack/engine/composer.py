"""Payload composer - builds the telemetry record for one update."""

import time
from collections.abc import Callable, Mapping
from typing import Any

from hippotrack.config.models import Policy
from hippotrack.errors import TrackError, create_error
from hippotrack.telemetry.logging import TrackLogger, get_logger
from hippotrack.types import ABSENT, EventCategory, FieldKind

from .classifier import label, parse_event
from .lookup import (
    ACTOR_PATHS,
    BOT_SENDER_PATHS,
    CHAT_PATHS,
    TIMESTAMP_PATHS,
    first_present,
    get_path,
)
from .pruner import prune_record
from .redactor import redact
from .sanitizer import Sanitizer
from .types import BotIdentity, ClassifiedEvent, TelemetryRecord

USER_FIELDS = ("id", "is_bot", "username", "first_name", "last_name", "language_code")
CHAT_FIELDS = ("id", "type", "title", "username")

SUCCESSFUL_PAYMENT_FIELDS = (
    "currency",
    "total_amount",
    "invoice_payload",
    "telegram_payment_charge_id",
    "provider_payment_charge_id",
)

# Only coarse location of a shipping address leaves the process
SHIPPING_ADDRESS_FIELDS = ("country_code", "state", "city")


def _pick(source: Any, fields: tuple[str, ...]) -> dict[str, Any] | None:
    """Copy ``fields`` verbatim from a mapping."""
    if not isinstance(source, Mapping):
        return None
    return {name: source.get(name) for name in fields}


class PayloadComposer:
    """Turns a raw update into a pruned TelemetryRecord.

    Stateless apart from the immutable policy; safe to share between
    concurrent invocations.
    """

    def __init__(
        self,
        policy: Policy,
        sanitizer: Sanitizer | None = None,
        clock: Callable[[], float] = time.time,
        logger: TrackLogger | None = None,
    ) -> None:
        """Initialize composer.

        Args:
            policy: Engine policy
            sanitizer: Snapshot sanitizer (defaults to one built from policy)
            clock: Source of the observed-at unix time
            logger: Logger for recovered failures
        """
        self._policy = policy
        self._sanitizer = sanitizer or Sanitizer(policy)
        self._clock = clock
        self._logger = logger or get_logger("engine")

    @property
    def policy(self) -> Policy:
        return self._policy

    def compose(self, raw_event: Any, bot_identity: BotIdentity | None = None) -> TelemetryRecord:
        """Build the telemetry record for one update.

        Args:
            raw_event: Raw update mapping
            bot_identity: Pre-known bot identity, if any

        Returns:
            Pruned record with no null or empty values
        """
        event = parse_event(raw_event)

        record: dict[str, Any] = {
            "bot": self._bot(raw_event, bot_identity),
            "user": self._fields(first_present(event.body, ACTOR_PATHS), USER_FIELDS),
            "chat": self._fields(first_present(event.body, CHAT_PATHS), CHAT_FIELDS),
            "event_type": label(event.category, self._policy.taxonomy),
        }
        record.update(self._text_fields(event))
        record["tg_date"] = first_present(raw_event, TIMESTAMP_PATHS)
        record["app_date"] = int(self._clock())
        record["media"] = self._media(event)
        record["payment"] = self._payment(event)

        if self._policy.include_raw_update:
            record["raw_update"] = self._snapshot(raw_event, event)

        return prune_record(record)

    # ─────────────────────────────────────────────────────────────────
    # Identity
    # ─────────────────────────────────────────────────────────────────

    def _bot(self, raw_event: Any, identity: BotIdentity | None) -> dict[str, Any] | None:
        if identity is not None and identity.known:
            return {"id": identity.id, "username": self._text(identity.username)}

        # Self identity may not be populated yet on the first update
        for path in BOT_SENDER_PATHS:
            sender = get_path(raw_event, path)
            if isinstance(sender, Mapping) and sender.get("is_bot") is True:
                return self._fields(sender, ("id", "username"))
        return None

    def _fields(self, source: Any, fields: tuple[str, ...]) -> dict[str, Any] | None:
        if not isinstance(source, Mapping):
            return None
        return {name: self._text(source.get(name)) for name in fields}

    # ─────────────────────────────────────────────────────────────────
    # Category fields
    # ─────────────────────────────────────────────────────────────────

    def _text(self, value: Any) -> Any:
        """Bound a scalar to the configured length."""
        if isinstance(value, (Mapping, list, tuple)):
            return ABSENT
        return redact(
            value,
            FieldKind.GENERIC,
            self._policy.max_text_length,
            self._policy.truncation_marker,
        )

    def _text_fields(self, event: ClassifiedEvent) -> dict[str, Any]:
        body = event.body
        fields: dict[str, Any] = {
            "message": None,
            "caption": None,
            "callback_query": None,
            "inline_query": None,
        }
        if event.is_message_like:
            fields["message"] = self._text(body.get("text"))
            fields["caption"] = self._text(body.get("caption"))
        elif event.category is EventCategory.CALLBACK_QUERY:
            fields["callback_query"] = self._text(body.get("data"))
        elif event.category in (EventCategory.INLINE_QUERY, EventCategory.CHOSEN_INLINE_RESULT):
            fields["inline_query"] = self._text(body.get("query"))
        return fields

    def _media(self, event: ClassifiedEvent) -> dict[str, Any] | None:
        if not event.is_message_like:
            return None
        body = event.body
        policy = self._policy
        # Attachments are whichever configured media fields the message carries
        media: dict[str, Any] = {
            name: redact(
                body.get(name),
                FieldKind.MEDIA,
                policy.max_text_length,
                policy.truncation_marker,
            )
            for name in sorted(policy.media_fields)
            if name in body
        }

        contact = body.get("contact")
        if isinstance(contact, Mapping):
            media["contact"] = {
                "user_id": contact.get("user_id"),
                "first_name": self._text(contact.get("first_name")),
            }

        location = body.get("location")
        if isinstance(location, Mapping):
            media["location"] = _pick(location, ("latitude", "longitude"))

        poll = body.get("poll")
        if isinstance(poll, Mapping):
            options = poll.get("options")
            if not isinstance(options, list):
                options = []
            media["poll"] = {
                "question": self._text(poll.get("question")),
                "options": [
                    self._text(option.get("text"))
                    for option in options
                    if isinstance(option, Mapping)
                ],
            }
        return media

    def _payment(self, event: ClassifiedEvent) -> dict[str, Any] | None:
        """Financial sub-record. Identifiers and amounts are kept verbatim."""
        body = event.body
        category = event.category

        if category is EventCategory.SUCCESSFUL_PAYMENT:
            return _pick(body.get("successful_payment"), SUCCESSFUL_PAYMENT_FIELDS)

        if category is EventCategory.INVOICE:
            invoice = body.get("invoice")
            if not isinstance(invoice, Mapping):
                return None
            return {
                "title": self._text(invoice.get("title")),
                "description": self._text(invoice.get("description")),
                "currency": invoice.get("currency"),
                "total_amount": invoice.get("total_amount"),
                "start_parameter": invoice.get("start_parameter"),
                "payload": invoice.get("payload"),
            }

        if category is EventCategory.PRE_CHECKOUT_QUERY:
            return {
                "id": body.get("id"),
                "currency": body.get("currency"),
                "total_amount": body.get("total_amount"),
                "payload": body.get("invoice_payload"),
            }

        if category is EventCategory.SHIPPING_QUERY:
            address = body.get("shipping_address")
            return {
                "id": body.get("id"),
                "payload": body.get("invoice_payload"),
                "shipping_address": self._fields(address, SHIPPING_ADDRESS_FIELDS),
            }

        return None

    # ─────────────────────────────────────────────────────────────────
    # Snapshot
    # ─────────────────────────────────────────────────────────────────

    def _snapshot(self, raw_event: Any, event: ClassifiedEvent) -> Any:
        """Sanitized copy of the whole update; omitted if sanitizing fails."""
        exempt = self._policy.exempt_financial_snapshot and event.is_financial
        try:
            return self._sanitizer.sanitize(raw_event, truncate=not exempt)
        except Exception as e:
            error = e if isinstance(e, TrackError) else create_error(
                "SANITIZE_FAILED", error_type=type(e).__name__
            )
            self._logger.warning(
                "Omitting raw_update",
                error_code=error.code,
                error_detail=error.detail,
                event_type=event.category.value,
            )
            return None
