"""Azure Event Hubs notifier for notification-controller events."""

__version__ = "0.1.0"
