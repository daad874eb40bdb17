"""Journal persistence gateways."""

from tradejournal.gateway.base import (
    AccessDeniedError,
    GatewayError,
    InvalidSettingsError,
    JournalGateway,
    NotAuthenticatedError,
)
from tradejournal.gateway.sqlite import LocalGateway

__all__ = [
    "AccessDeniedError",
    "GatewayError",
    "InvalidSettingsError",
    "JournalGateway",
    "NotAuthenticatedError",
    "LocalGateway",
]
