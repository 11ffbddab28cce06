"""hippotrack configuration data models."""

from dataclasses import dataclass, field

from hippotrack.types import Taxonomy

DEFAULT_MEDIA_FIELDS: tuple[str, ...] = (
    "photo",
    "video",
    "document",
    "voice",
    "sticker",
    "animation",
    "audio",
    "video_note",
    "chat_photo",
    "new_chat_photo",
    "thumbnail",
    "thumb",
)

DEFAULT_SENSITIVE_FIELDS: tuple[str, ...] = (
    "phone_number",
    "vcard",
    "email",
    "order_info",
    "street_line1",
    "street_line2",
    "post_code",
)


@dataclass(frozen=True)
class Policy:
    """Immutable engine policy, built once and shared by every invocation."""

    max_text_length: int = 500
    include_raw_update: bool = False
    media_fields: frozenset[str] = frozenset(DEFAULT_MEDIA_FIELDS)
    sensitive_fields: frozenset[str] = frozenset(DEFAULT_SENSITIVE_FIELDS)
    truncation_marker: str = ""  # empty = no marker
    max_depth: int = 64
    exempt_financial_snapshot: bool = True
    taxonomy: Taxonomy = Taxonomy.DETAILED


@dataclass
class TrackerConfig:
    """Tracker configuration.

    ``endpoint`` and ``token`` are required for delivery; everything else
    has a default matching the documented option surface.
    """

    endpoint: str = ""
    token: str = ""

    # Diagnostics: log the outgoing record and its size
    log: bool = False

    max_text_length: int = 500
    timeout_ms: int = 3000
    include_raw_update: bool = False

    taxonomy: Taxonomy = Taxonomy.DETAILED

    media_fields: list[str] = field(default_factory=lambda: list(DEFAULT_MEDIA_FIELDS))
    sensitive_fields: list[str] = field(default_factory=lambda: list(DEFAULT_SENSITIVE_FIELDS))
    truncation_marker: str = ""
    max_depth: int = 64
    exempt_financial_snapshot: bool = True

    def to_policy(self) -> Policy:
        """Build the frozen engine policy from this config."""
        return Policy(
            max_text_length=self.max_text_length,
            include_raw_update=self.include_raw_update,
            media_fields=frozenset(self.media_fields),
            sensitive_fields=frozenset(self.sensitive_fields),
            truncation_marker=self.truncation_marker,
            max_depth=self.max_depth,
            exempt_financial_snapshot=self.exempt_financial_snapshot,
            taxonomy=Taxonomy(self.taxonomy),
        )
