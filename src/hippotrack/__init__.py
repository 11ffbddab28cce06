"""hippotrack - privacy-bounded telemetry for chat-bot updates.

Classifies each update, keeps only the fields relevant to its category,
bounds every string and ships a null-free record to a collector.
"""

from hippotrack.config import ConfigLoader, Policy, TrackerConfig
from hippotrack.delivery import DeliveryAdapter, DeliveryResult
from hippotrack.engine import BotIdentity, PayloadComposer, classify, prune, redact
from hippotrack.middleware import HippoTracker
from hippotrack.types import DeliveryStatus, EventCategory, Taxonomy

__version__ = "0.3.0"
__all__ = [
    "__version__",
    "HippoTracker",
    "TrackerConfig",
    "Policy",
    "ConfigLoader",
    "PayloadComposer",
    "BotIdentity",
    "DeliveryAdapter",
    "DeliveryResult",
    "DeliveryStatus",
    "EventCategory",
    "Taxonomy",
    "classify",
    "redact",
    "prune",
]
