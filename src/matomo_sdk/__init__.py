"""Matomo SDK - async client for the Matomo tracking HTTP API."""

from matomo_sdk.core.events import ErrorListener, ErrorListeners, TrackerEvent
from matomo_sdk.core.exceptions import ConfigurationError, DeliveryError, InvalidArgumentError, MatomoError
from matomo_sdk.core.options import TrackOptions
from matomo_sdk.core.results import TrackFailure, TrackResult, TrackSuccess
from matomo_sdk.core.settings import TrackerSettings
from matomo_sdk.core.tracker import MatomoTracker

__version__ = "0.1.0"

__all__ = [  # noqa: RUF022
    # Core
    "MatomoTracker",
    "TrackOptions",
    "TrackerSettings",
    # Results
    "TrackResult",
    "TrackSuccess",
    "TrackFailure",
    # Events
    "ErrorListener",
    "ErrorListeners",
    "TrackerEvent",
    # Exceptions
    "MatomoError",
    "InvalidArgumentError",
    "ConfigurationError",
    "DeliveryError",
    "__version__",
]
