"""Application bootstrap: logging, configuration checks and store wiring."""

import logging
from dataclasses import dataclass

from pulseboard.persistence.snapshot import StatePersistence
from pulseboard.persistence.storage import KeyValueStorage, build_storage
from pulseboard.services.analytics import BlogAnalytics
from pulseboard.settings import AppSettings, get_settings
from pulseboard.store.store import Store

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(active_settings: AppSettings | None = None) -> None:
    """Configure root logging from settings."""

    resolved = active_settings or get_settings()
    logging.basicConfig(level=resolved.log_level_numeric, format=LOG_FORMAT)


def _validate_environment(active_settings: AppSettings) -> None:
    """Log a banner with warnings for unset optional configuration."""
    warnings = active_settings.optional_config_warnings()

    if warnings:
        logger.warning("=" * 60)
        logger.warning("Environment Configuration Warnings:")
        for warning in warnings:
            logger.warning(f"  • {warning}")
        logger.warning("=" * 60)


def validate_environment(active_settings: AppSettings | None = None) -> None:
    """Public wrapper so the CLI can trigger configuration validation."""

    _validate_environment(active_settings or get_settings())


@dataclass(slots=True)
class Application:
    """Everything a front end needs to drive a session."""

    settings: AppSettings
    storage: KeyValueStorage
    persistence: StatePersistence
    store: Store


def bootstrap(
    active_settings: AppSettings | None = None,
    *,
    storage: KeyValueStorage | None = None,
) -> Application:
    """Build storage, persistence and a store restored from the saved slices."""

    resolved = active_settings or get_settings()
    backend = storage if storage is not None else build_storage(resolved)
    persistence = StatePersistence(backend)
    analytics = BlogAnalytics(
        window_days=resolved.analytics_window_days,
        top_limit=resolved.top_posts_limit,
    )
    store = Store.from_persistence(persistence, analytics=analytics)
    logger.debug(
        "Bootstrapped store with %d posts and %d bookmarks",
        len(store.state.blog_posts),
        len(store.state.bookmarks),
    )
    return Application(
        settings=resolved,
        storage=backend,
        persistence=persistence,
        store=store,
    )


__all__ = [
    "Application",
    "LOG_FORMAT",
    "bootstrap",
    "configure_logging",
    "validate_environment",
]
