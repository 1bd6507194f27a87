"""Feature modules for sentry-bridge."""
