"""Discord relay — forwards channel messages to automation webhooks as signed JSON."""

__version__ = "0.1.0"
