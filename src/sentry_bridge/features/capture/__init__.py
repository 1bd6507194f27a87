"""Capture feature - reports exceptions and errors to Sentry."""

from sentry_bridge.features.capture.client import SentryClient, request_to_dict
from sentry_bridge.features.capture.logger import SentryErrorLogger

__all__ = [
    "SentryClient",
    "SentryErrorLogger",
    "request_to_dict",
]
