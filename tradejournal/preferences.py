"""User settings lifecycle.

The gateway is the source of truth. A local mirror of the last loaded
settings is kept so the journal still renders projections when the
backend is unreachable.
"""

import logging

from pydantic import ValidationError

from tradejournal.config import load_cached_settings, save_cached_settings
from tradejournal.gateway import GatewayError, JournalGateway
from tradejournal.models import Settings

logger = logging.getLogger(__name__)


def cached_settings() -> Settings:
    """Read the local settings mirror, defaulting to empty settings."""
    data = load_cached_settings()
    if not data:
        return Settings()
    try:
        return Settings(**data)
    except ValidationError as e:
        logger.warning("Ignoring invalid settings cache: %s", e)
        return Settings()


def load_settings(gateway: JournalGateway) -> Settings:
    """Load settings from the gateway, falling back to the local mirror.

    Args:
        gateway: Journal gateway.

    Returns:
        Remote settings when available (the mirror is refreshed), the
        cached mirror when the gateway fails or has none stored.
    """
    try:
        settings = gateway.get_settings()
    except GatewayError as e:
        logger.warning("Using cached settings, backend unavailable: %s", e)
        return cached_settings()

    if settings is None:
        return cached_settings()

    save_cached_settings(settings.model_dump(mode="json"))
    return settings


def update_settings(gateway: JournalGateway, **changes) -> Settings:
    """Save a partial settings update remotely, then refresh the mirror.

    Raises:
        GatewayError: If the backend rejects the update. The mirror is
            left unchanged.
    """
    settings = gateway.update_settings(**changes)
    save_cached_settings(settings.model_dump(mode="json"))
    logger.debug("Settings saved: %s", settings)
    return settings
