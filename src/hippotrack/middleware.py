"""Bot middleware - tracks every update passing through the runtime.

Usage:
    tracker = HippoTracker(TrackerConfig(endpoint=URL, token=TOKEN))

    async def on_update(update, bot):
        await tracker(update, bot, lambda: handle(update))
"""

from collections.abc import Awaitable, Callable, Mapping
from pathlib import Path
from types import TracebackType
from typing import Any, TypeVar

from hippotrack.config import ConfigLoader, TrackerConfig
from hippotrack.delivery import DeliveryAdapter, DeliveryResult
from hippotrack.engine import BotIdentity, PayloadComposer
from hippotrack.telemetry.logging import TrackLogger, get_logger
from hippotrack.telemetry.metrics import TrackerMetrics

T = TypeVar("T")


def update_to_mapping(update: Any) -> Any:
    """Plain mapping view of a runtime update object.

    Accepts mappings as-is, objects exposing ``to_dict()`` or
    ``model_dump()``; anything else is returned unchanged and will classify
    as unknown. Pydantic models are dumped in JSON mode under their wire
    aliases, so ``from_user`` comes back as ``from`` and dates as unix
    timestamps or strings.
    """
    if isinstance(update, Mapping):
        return update
    to_dict = getattr(update, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    model_dump = getattr(update, "model_dump", None)
    if callable(model_dump):
        return model_dump(mode="json", by_alias=True, exclude_none=True)
    return update


def resolve_bot_identity(bot: Any) -> BotIdentity | None:
    """Best-effort identity of the bot handle.

    Understands BotIdentity, mappings with ``id``/``username``, objects with
    ``id``/``username`` attributes, and handles carrying them on
    ``bot_info`` or ``me``. A handle that cannot report its identity yet
    (properties raising before initialization) yields None, so the
    composer falls back to the update's bot sender.
    """
    if bot is None or isinstance(bot, BotIdentity):
        return bot
    try:
        return _read_identity(bot)
    except Exception:
        return None


def _read_identity(bot: Any) -> BotIdentity | None:
    if isinstance(bot, Mapping):
        return BotIdentity(id=bot.get("id"), username=bot.get("username"))
    for attr in ("bot_info", "me"):
        info = getattr(bot, attr, None)
        if info is not None and not callable(info):
            return resolve_bot_identity(info)
    bot_id = getattr(bot, "id", None)
    username = getattr(bot, "username", None)
    if bot_id is None and username is None:
        return None
    return BotIdentity(id=bot_id, username=username)


class HippoTracker:
    """Composes and ships one telemetry record per update.

    Telemetry never interferes with the bot: normalization failures are
    logged and dropped, delivery is bounded by ``timeout_ms``.
    """

    def __init__(
        self,
        config: TrackerConfig,
        composer: PayloadComposer | None = None,
        adapter: DeliveryAdapter | None = None,
        metrics: TrackerMetrics | None = None,
        logger: TrackLogger | None = None,
    ) -> None:
        """Initialize tracker.

        Args:
            config: Tracker configuration
            composer: Payload composer (defaults to one built from config)
            adapter: Delivery adapter (defaults to one built from config)
            metrics: Metrics instruments
            logger: Structured logger
        """
        self._config = config
        self._metrics = metrics or TrackerMetrics()
        self._logger = logger or get_logger("tracker")
        self._composer = composer or PayloadComposer(config.to_policy())
        self._adapter = adapter or DeliveryAdapter(
            endpoint=config.endpoint,
            token=config.token,
            timeout_ms=config.timeout_ms,
            log=config.log,
            metrics=self._metrics,
        )

    @classmethod
    def from_config_file(cls, path: str | Path | None = None) -> "HippoTracker":
        """Build a tracker from a YAML config file."""
        return cls(ConfigLoader(logger=get_logger("config")).load(path))

    @classmethod
    def from_env(cls) -> "HippoTracker":
        """Build a tracker from HIPPOTRACK_* environment variables."""
        return cls(ConfigLoader(logger=get_logger("config")).load_from_env())

    @property
    def config(self) -> TrackerConfig:
        return self._config

    async def track(self, update: Any, bot: Any = None) -> DeliveryResult | None:
        """Compose and deliver the record for one update.

        Args:
            update: Raw update (mapping or runtime object)
            bot: Bot handle used to resolve self identity

        Returns:
            DeliveryResult, or None when no record could be built
        """
        try:
            record = self._composer.compose(update_to_mapping(update), resolve_bot_identity(bot))
        except Exception:
            self._logger.exception("Failed to compose telemetry record")
            return None

        event_type = record.get("event_type")
        self._metrics.record_event(event_type or "unknown")
        return await self._adapter.deliver(record, event_type=event_type)

    async def __call__(
        self,
        update: Any,
        bot: Any,
        call_next: Callable[[], Awaitable[T]],
    ) -> T:
        """Middleware entry point: track, then hand over to the next handler.

        ``call_next`` runs whatever happens to the telemetry record.
        """
        try:
            await self.track(update, bot)
        except Exception:
            self._logger.exception("Failed to track update")
        return await call_next()

    async def aclose(self) -> None:
        await self._adapter.aclose()

    async def __aenter__(self) -> "HippoTracker":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
