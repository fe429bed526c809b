"""Recipe Relay: push-notification, recipe scraping and auth relay service."""

__version__ = "1.0.0"
