"""Application bootstrap.

Wires settings, logging, the event store, the repository, and the
command handler together.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .application.command_handler import CommandHandler
from .core.config import Settings, load_settings
from .infrastructure.event_store import IEventStore, build_event_store
from .infrastructure.repository import OrderRepository
from .observability.logger import get_logger, setup_logging

logger = get_logger(__name__)


@dataclass
class App:
    """Wired components for one process."""

    settings: Settings
    store: IEventStore
    repository: OrderRepository
    handler: CommandHandler


def bootstrap(
    config_path: str | None = None,
    overrides: dict[str, Any] | None = None,
) -> App:
    """Load config, set up logging, and wire the ordering core."""

    # 1. Load settings
    settings = load_settings(config_path=config_path, overrides=overrides)

    # 2. Set up logging
    setup_logging(settings.observability)

    # 3. Store, repository, handler
    store = build_event_store(settings)
    repository = OrderRepository(store)
    handler = CommandHandler(repository)

    logger.debug("app.bootstrapped", backend=settings.store.backend.value)
    return App(settings=settings, store=store, repository=repository, handler=handler)
